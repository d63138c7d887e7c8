class MorseKeyError(Exception):
    """ Base class of all errors raised by the morsekey package. """
    pass

class InvalidConfiguration(MorseKeyError):
    """ Raised when a configuration change is rejected, e.g. a non-positive or non-finite speed. The previously active
        configuration stays in effect. """
    pass

class ProtocolViolation(MorseKeyError):
    """ Raised when key events arrive in an order that makes no sense, e.g. a signal end without a signal start. """
    pass
