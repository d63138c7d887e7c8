class ProgressStage:
    RESET = 'reset'
    CHAR_LOCK = 'char-lock'
    WORD_GAP = 'word-gap'
    DONE = 'done'

class DecodeUpdate:
    """ Sent by the decoder on every change of its state. `preview` holds the character the pending sequence would
        commit to right now, or an empty string. """
    def __init__(self, decoded_text: str, pending_sequence: str, preview: str):
        self.decoded_text = decoded_text
        self.pending_sequence = pending_sequence
        self.preview = preview

    def __eq__(self, other) -> bool:
        return (isinstance(other, DecodeUpdate) and self.decoded_text == other.decoded_text and
                self.pending_sequence == other.pending_sequence and self.preview == other.preview)

    def __repr__(self):
        return f'DecodeUpdate({self.decoded_text!r}, {self.pending_sequence!r}, {self.preview!r})'

class ProgressUpdate:
    """ Sent by the countdown on every tick and on reset; `progress` is a percentage in the range [0; 100]. """
    def __init__(self, progress: float, stage: str):
        self.progress = progress
        self.stage = stage

    def __eq__(self, other) -> bool:
        return isinstance(other, ProgressUpdate) and self.progress == other.progress and self.stage == other.stage

    def __repr__(self):
        return f'ProgressUpdate({self.progress:.1f}, {self.stage!r})'

class ActivationUpdate:
    """ Sent by the playback engine whenever the visual activation indicator turns on or off. """
    def __init__(self, active: bool):
        self.active = active

    def __eq__(self, other) -> bool:
        return isinstance(other, ActivationUpdate) and self.active == other.active

    def __repr__(self):
        return f'ActivationUpdate({self.active})'

class PlaybackUpdate:
    """ Sent by the playback engine when a playback starts (`playing` is `True`) and when it ends or is cancelled. """
    def __init__(self, playing: bool, sequence: str = ''):
        self.playing = playing
        self.sequence = sequence

    def __eq__(self, other) -> bool:
        return isinstance(other, PlaybackUpdate) and self.playing == other.playing and self.sequence == other.sequence

    def __repr__(self):
        return f'PlaybackUpdate({self.playing}, {self.sequence!r})'
