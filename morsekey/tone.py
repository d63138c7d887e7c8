from typing import BinaryIO, Callable
from morsekey.utils import clamp
import logging
import numpy as np
import os
import soundfile
import sys

logger = logging.getLogger(__name__)

# Time constant of the exponential attack and release of the tone (given in seconds)
FADE_TIME_CONSTANT = 0.001

def gain_envelope(start_gain: float, target_gain: float, num_samples: int, sample_rate: int,
                  time_constant: float = FADE_TIME_CONSTANT) -> np.ndarray:
    """ Returns the gain of `num_samples` consecutive samples approaching `target_gain` from `start_gain`
        exponentially with the given time constant. """
    t = np.arange(num_samples) / sample_rate
    return target_gain + (start_gain - target_gain) * np.exp(-t / time_constant)

class ToneDriver:
    """ An abstract base class for something that produces an audible tone while it is active. Both the key input and
        the playback engine switch the same driver; whoever switches last wins. """
    def __init__(self):
        self._active = False

    def is_active(self) -> bool:
        return self._active

    def activate(self):
        self._active = True

    def deactivate(self):
        self._active = False

class ToneRecorder(ToneDriver):
    """ A tone driver that records each change of its state together with the time given by `clock` (in
        milliseconds). Switching to the state it already is in is not recorded. """
    def __init__(self, clock: Callable[[], float]):
        super().__init__()
        self._clock = clock
        self._transitions: list[tuple[float, bool]] = []

    def transitions(self) -> list[tuple[float, bool]]:
        return self._transitions

    def activate(self):
        if not self._active:
            self._transitions.append((self._clock(), True))
        super().activate()

    def deactivate(self):
        if self._active:
            self._transitions.append((self._clock(), False))
        super().deactivate()

    def durations(self) -> list[float]:
        """ Returns the durations between consecutive transitions, i.e. alternating `on` and `off` durations if the
            first transition was an activation. """
        return [b[0] - a[0] for a, b in zip(self._transitions, self._transitions[1:])]

class ToneFileWriter(ToneRecorder):
    """ A tone recorder that renders the recorded tone into a sound file when it gets closed. """
    def __init__(self, file: str | int | BinaryIO, clock: Callable[[], float], volume: float = 0.9,
                 frequency: float = 600.0, sample_rate: int = 8000):
        super().__init__(clock)
        self._file = os.path.expanduser(file) if isinstance(file, str) else file
        self._volume = clamp(volume, 0, 1)
        self._frequency = frequency
        self._sample_rate = int(clamp(sample_rate, 1000, 192000))
        self._start_ms = clock()
        self._closed = False

    def sample_rate(self):
        return self._sample_rate

    def render(self, end_ms: float) -> np.ndarray:
        """ Returns the waveform of the recorded tone from the creation of this writer up to `end_ms`. """
        total_samples = max(int((end_ms - self._start_ms) * self._sample_rate / 1000), 0)
        gains = np.zeros(total_samples)
        gain = 0.0
        position = 0
        target = 0.0
        for time_ms, active in self._transitions + [(end_ms, False)]:
            next_position = clamp(int((time_ms - self._start_ms) * self._sample_rate / 1000), position, total_samples)
            if next_position > position:
                segment = gain_envelope(gain, target, next_position - position, self._sample_rate)
                gains[position:next_position] = segment
                gain = segment[-1]
                position = next_position
            target = 1.0 if active else 0.0
        t = np.arange(total_samples) / self._sample_rate
        return self._volume * gains * np.sin(2 * np.pi * self._frequency * t)

    def close(self):
        """ Renders the recorded tone up to now and writes it to the sound file. """
        if self._closed:
            return
        self._closed = True
        waveform = self.render(self._clock())

        if isinstance(self._file, str):
            directory_path = os.path.dirname(self._file)
            if directory_path:
                os.makedirs(directory_path, exist_ok = True)
            soundfile.write(self._file, waveform, self._sample_rate, subtype = 'PCM_16')
        else:
            with soundfile.SoundFile(self._file, mode = 'w', samplerate = self._sample_rate, channels = 1,
                                     format = 'WAV', subtype = 'PCM_16', closefd = False) as sound_file:
                sound_file.write(waveform)

class PyAudioTone(ToneDriver):
    """ A tone driver that plays a sine tone on the default audio device. The gain follows the activation state with a
        fast exponential attack and release so that switching does not click. """
    def __init__(self, frequency: float = 600.0, volume: float = 0.9, sample_rate: int = 8000, open: bool = True):
        super().__init__()
        self._frequency = clamp(frequency, 100, 10000)
        self._volume = clamp(volume, 0, 1)
        self._sample_rate = int(clamp(sample_rate, 1000, 192000))
        self._gain = 0.0
        self._sample_position = 0
        self._pyaudio = None
        self._stream = None

        if open:
            self.open()

    def __del__(self):
        self.close()

    def frequency(self):
        return self._frequency

    def volume(self):
        return self._volume

    def is_open(self) -> bool:
        return self._stream is not None

    def open(self):
        if self._pyaudio is not None:
            return
        import pyaudio
        self._pyaudio = pyaudio.PyAudio()
        try:
            self._stream = self._pyaudio.open(format = pyaudio.paFloat32, channels = 1, rate = self._sample_rate,
                                              output = True, stream_callback = self._callback)
        except (OSError, ValueError) as e:
            print("Error: Could not establish connection to default audio device", file = sys.stderr)
            logger.warning(f"Opening audio output failed: {e}")
            self._pyaudio.terminate()
            self._pyaudio = None

    def close(self):
        if self._pyaudio is None:
            return
        if self._stream is not None:
            self._stream.stop_stream()
            self._stream.close()
        self._pyaudio.terminate()
        self._stream = None
        self._pyaudio = None

    def render(self, frame_count: int) -> np.ndarray:
        """ Returns the next `frame_count` samples of the tone, continuing phase and gain of the previous samples. """
        target = 1.0 if self._active else 0.0
        gains = gain_envelope(self._gain, target, frame_count, self._sample_rate)
        self._gain = gains[-1] if frame_count > 0 else self._gain
        t = (self._sample_position + np.arange(frame_count)) / self._sample_rate
        self._sample_position += frame_count
        return (self._volume * gains * np.sin(2 * np.pi * self._frequency * t)).astype(np.float32)

    def _callback(self, data, frame_count, time_info, flags):
        import pyaudio
        return (self.render(frame_count).tobytes(), pyaudio.paContinue)

class MultiToneDriver(ToneDriver):
    """ A tone driver that passes every switch on to all of the given drivers, e.g. to play and record at once. """
    def __init__(self, *drivers: ToneDriver):
        super().__init__()
        self._drivers = list(drivers)

    def drivers(self) -> list[ToneDriver]:
        return self._drivers

    def activate(self):
        super().activate()
        for driver in self._drivers:
            driver.activate()

    def deactivate(self):
        super().deactivate()
        for driver in self._drivers:
            driver.deactivate()
