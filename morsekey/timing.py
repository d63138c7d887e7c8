from morsekey.errors import InvalidConfiguration
import math
import numbers

# Number of milliseconds per unit at 1 word per minute according to the PARIS standard (50 units per word)
PARIS_UNIT_MS_AT_ONE_WPM = 1200

def wpm_to_unit_ms(words_per_minute: float) -> float:
    """ Converts the given 'words per minute' into 'milliseconds per unit'. """
    return PARIS_UNIT_MS_AT_ONE_WPM / words_per_minute

def unit_ms_to_wpm(milliseconds_per_unit: float) -> float:
    """ Converts the given 'milliseconds per unit' into 'words per minute'. """
    return PARIS_UNIT_MS_AT_ONE_WPM / milliseconds_per_unit

class TimingProfile:
    """ All durations derived from a speed given in words per minute [wpm]. A unit is the duration of one dot; signals
        shorter than 2 units are dots, 3 units of silence end a character and 7 units of silence end a word. Profiles
        are immutable; a speed change creates a new profile. """
    DOT_THRESHOLD_UNITS = 2
    CHAR_GAP_UNITS = 3
    WORD_GAP_UNITS = 7

    def __init__(self, wpm: int | float):
        if isinstance(wpm, bool) or not isinstance(wpm, numbers.Real):
            raise InvalidConfiguration(f"speed must be a number, got {wpm!r}")
        if not math.isfinite(wpm) or wpm <= 0:
            raise InvalidConfiguration(f"speed must be a finite number greater than 0 wpm, got {wpm}")
        self._wpm = wpm
        self._unit_ms = wpm_to_unit_ms(wpm)

    @property
    def wpm(self) -> float:
        return self._wpm

    @property
    def unit_ms(self) -> float:
        return self._unit_ms

    @property
    def dot_threshold_ms(self) -> float:
        return self._unit_ms * TimingProfile.DOT_THRESHOLD_UNITS

    @property
    def char_gap_ms(self) -> float:
        return self._unit_ms * TimingProfile.CHAR_GAP_UNITS

    @property
    def word_gap_ms(self) -> float:
        return self._unit_ms * TimingProfile.WORD_GAP_UNITS

    def __eq__(self, other) -> bool:
        return isinstance(other, TimingProfile) and self._wpm == other._wpm

    def __hash__(self) -> int:
        return hash(self._wpm)

    def __repr__(self):
        return (f'TimingProfile(wpm={self._wpm}, unit={self.unit_ms:.1f}ms, threshold={self.dot_threshold_ms:.1f}ms, '
                f'char_gap={self.char_gap_ms:.1f}ms, word_gap={self.word_gap_ms:.1f}ms)')
