from morsekey.events import ProgressStage, ProgressUpdate
from morsekey.schedule import Scheduler
from morsekey.streams import Stream
from morsekey.timing import TimingProfile

DEFAULT_TICK_MS = 16.0

class Countdown:
    """ Produces a periodic progress signal that previews when the decoder is going to commit. The countdown runs in two
        stages measured from its own start: the character lock stage until the character gap has elapsed and the word
        gap stage until the word gap has elapsed. Only one countdown is active at a time. """
    ACTION_NAME = 'countdown'

    def __init__(self, scheduler: Scheduler, tick_ms: float = DEFAULT_TICK_MS):
        assert tick_ms > 0, "tick must be greater than 0"
        self._scheduler = scheduler
        self._tick_ms = tick_ms
        self._progress_stream = Stream()
        self._start_ms = None
        self._char_gap_ms = None
        self._word_gap_ms = None

    def progress_stream(self) -> Stream:
        return self._progress_stream

    def tick_ms(self) -> float:
        return self._tick_ms

    def is_running(self) -> bool:
        return self._scheduler.is_scheduled(Countdown.ACTION_NAME)

    def start(self, profile: TimingProfile):
        """ Starts a new countdown with the gaps of the given profile, replacing a running one. """
        self._start_ms = self._scheduler.now()
        self._char_gap_ms = profile.char_gap_ms
        self._word_gap_ms = profile.word_gap_ms
        self._scheduler.schedule_periodic(Countdown.ACTION_NAME, self._tick_ms, self._tick)

    def reset(self):
        """ Stops a running countdown and sends a reset. """
        self._scheduler.cancel(Countdown.ACTION_NAME)
        self._start_ms = None
        self._progress_stream.send(ProgressUpdate(0, ProgressStage.RESET))

    def progress_at(self, elapsed_ms: float) -> ProgressUpdate:
        """ Returns the progress and stage of this countdown after `elapsed_ms` have passed since it was started. """
        if elapsed_ms < self._char_gap_ms:
            return ProgressUpdate(elapsed_ms / self._char_gap_ms * 100, ProgressStage.CHAR_LOCK)
        elif elapsed_ms < self._word_gap_ms:
            word_elapsed_ms = elapsed_ms - self._char_gap_ms
            word_duration_ms = self._word_gap_ms - self._char_gap_ms
            return ProgressUpdate(word_elapsed_ms / word_duration_ms * 100, ProgressStage.WORD_GAP)
        return ProgressUpdate(100, ProgressStage.DONE)

    def _tick(self):
        update = self.progress_at(self._scheduler.now() - self._start_ms)
        if update.stage == ProgressStage.DONE:
            self._scheduler.cancel(Countdown.ACTION_NAME)
        self._progress_stream.send(update)
