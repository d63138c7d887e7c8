from typing import Callable
from morsekey.events import ActivationUpdate, PlaybackUpdate
from morsekey.morse import Symbol
from morsekey.streams import Stream
from morsekey.timing import TimingProfile
from morsekey.tone import ToneDriver
import logging

logger = logging.getLogger(__name__)

# A space in a played sequence stands for the pause between two characters
CHARACTER_PAUSE = ' '

class PlaybackPhase:
    def __init__(self, audible: bool, duration_ms: float):
        self.audible = audible
        self.duration_ms = duration_ms

def token_phases(token: str, unit_ms: float) -> list[PlaybackPhase]:
    """ Returns the phases a single token of a played sequence consists of. Each token is followed by a pause of one
        unit. A space is a silent pause of three units (so the pause between two characters spans five units in total);
        unknown tokens only produce the one unit pause. """
    phases = []
    if token == Symbol.DOT:
        phases.append(PlaybackPhase(True, unit_ms))
    elif token == Symbol.DASH:
        phases.append(PlaybackPhase(True, unit_ms * 3))
    elif token == CHARACTER_PAUSE:
        phases.append(PlaybackPhase(False, unit_ms * 3))
    phases.append(PlaybackPhase(False, unit_ms))
    return phases

def sequence_duration_ms(sequence: str, unit_ms: float) -> float:
    """ Returns how long it takes to play the given sequence. """
    return sum(phase.duration_ms for token in sequence for phase in token_phases(token, unit_ms))

class PlaybackEngine:
    """ Plays a Morse code sequence made of dots, dashes and spaces as timed tone pulses. The engine does not wait on
        its own; it is a state machine that moves on by the time passed to `advance()`. While playing it switches the
        tone driver and sends `ActivationUpdate`s on the activation stream so that a visual indicator can follow the
        tone. Only one sequence plays at a time. """
    def __init__(self, tone: ToneDriver, profile: Callable[[], TimingProfile]):
        self._tone = tone
        self._profile = profile
        self._activation_stream = Stream()
        self._playback_stream = Stream()
        self._playing = False
        self._cancel_requested = False
        self._sequence = ''
        self._token_index = 0
        self._unit_ms = None
        self._phases: list[PlaybackPhase] = []
        self._phase_remaining_ms = 0.0

    def activation_stream(self) -> Stream:
        return self._activation_stream

    def playback_stream(self) -> Stream:
        return self._playback_stream

    def is_playing(self) -> bool:
        return self._playing

    def sequence(self) -> str:
        return self._sequence

    def play(self, sequence: str) -> bool:
        """ Starts playing the given sequence with the unit duration of the current timing profile. Returns `False`
            without doing anything if a sequence is already playing. """
        if self._playing:
            logger.debug(f"Ignored playback of '{sequence}' while playing '{self._sequence}'")
            return False

        self._playing = True
        self._cancel_requested = False
        self._sequence = sequence
        self._token_index = 0
        self._unit_ms = self._profile().unit_ms
        self._phases = []
        logger.debug(f"Playing '{sequence}' with {self._unit_ms:.1f}ms per unit")
        self._playback_stream.send(PlaybackUpdate(True, sequence))

        self._next_phase()
        return True

    def cancel(self):
        """ Requests the playback to stop; takes effect on the next call to `advance()`. Does nothing if nothing is
            playing. """
        if self._playing:
            self._cancel_requested = True

    def time_to_next_transition(self) -> float | None:
        """ Returns the time until the playback changes its state next, or `None` if nothing is playing. """
        if not self._playing:
            return None
        if self._cancel_requested:
            return 0.0
        return self._phase_remaining_ms

    def remaining_ms(self) -> float:
        """ Returns the time it takes to play the rest of the sequence. """
        if not self._playing:
            return 0.0
        remaining = self._phase_remaining_ms + sum(phase.duration_ms for phase in self._phases[1:])
        return remaining + sequence_duration_ms(self._sequence[self._token_index:], self._unit_ms)

    def advance(self, elapsed_ms: float):
        if not self._playing:
            return
        if self._cancel_requested:
            logger.debug(f"Playback of '{self._sequence}' cancelled")
            self._finish()
            return

        while self._playing:
            if self._phase_remaining_ms > elapsed_ms:
                self._phase_remaining_ms -= elapsed_ms
                return
            elapsed_ms -= self._phase_remaining_ms
            self._end_phase()
            self._next_phase()

    def _next_phase(self):
        if not self._phases:
            if self._cancel_requested or self._token_index >= len(self._sequence):
                self._finish()
                return
            self._phases = token_phases(self._sequence[self._token_index], self._unit_ms)
            self._token_index += 1

        phase = self._phases[0]
        self._phase_remaining_ms = phase.duration_ms
        if phase.audible:
            self._tone.activate()
            self._activation_stream.send(ActivationUpdate(True))

    def _end_phase(self):
        phase = self._phases.pop(0)
        if phase.audible:
            self._tone.deactivate()
            self._activation_stream.send(ActivationUpdate(False))

    def _finish(self):
        if self._phases and self._phases[0].audible:
            self._tone.deactivate()
            self._activation_stream.send(ActivationUpdate(False))
        sequence = self._sequence
        self._playing = False
        self._cancel_requested = False
        self._phases = []
        self._phase_remaining_ms = 0.0
        self._token_index = 0
        logger.debug(f"Playback of '{sequence}' finished")
        self._playback_stream.send(PlaybackUpdate(False, sequence))
