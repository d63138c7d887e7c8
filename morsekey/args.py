from morsekey.timing import unit_ms_to_wpm
from morsekey.utils import clamp, color_to_ansi_escape, dual_split, TextCase
import argparse
import logging
import morsekey.version as version
import os
import re
import sys

ALLOWED_INPUT_FORMATS = [ 'k', 'keys', 'f', 'file', 'c', 'code', 't', 'text' ]
ALLOWED_OUTPUT_FORMATS = [ 't', 'text', 'p', 'progress', 's', 'sound', 'w', 'wav' ]
ALLOWED_LOG_LEVELS = [ 'debug', 'info', 'warning', 'error', 'critical' ]

NUMBER = r'(?:\d+(?:[\.,]\d*)?|[\.,]\d+)(?:[eE][+-]?\d+)?'

ARGUMENT_VALUE_PATTERN = re.compile(r'^(?P<argument>[a-z]+):(?P<value>.+)$', re.DOTALL)
TIME_UNIT_VALUE_PATTERN = re.compile(rf'^(?P<value>[-+]?{NUMBER})(?P<unit>s|ms)$', re.IGNORECASE)
SPEED_UNIT_VALUE_PATTERN = re.compile(rf'^(?P<value>[-+]?{NUMBER})(?P<unit>wpm|ms)$', re.IGNORECASE)
FREQUENCY_UNIT_VALUE_PATTERN = re.compile(rf'^(?P<value>[-+]?{NUMBER})(?P<unit>hz|khz)$', re.IGNORECASE)
KEY_EVENT_PATTERN = re.compile(rf'^(?P<state>[+-])(?P<value>{NUMBER})(?P<unit>s|ms)?$', re.IGNORECASE)
MORSE_INPUT_PATTERN = re.compile(r'^[\.\-\/ ]+$')

def parse_number(input: str) -> float:
    return float(input.replace(',', '.'))

def check_time(input: str) -> bool:
    """ Checks a time value from the given input string for validity. Returns `True` if it is valid. """
    if input and (match := TIME_UNIT_VALUE_PATTERN.match(input)):
        return parse_number(match.group('value')) >= 0
    return False

def parse_time_ms(input: str) -> float:
    """ Parses a time value from the given input string, clamps it and returns it in milliseconds [ms]. Returns `None`
        if the input string does not contain a valid time value. Supported units are seconds [s] and milliseconds [ms].
        Minimum is 0 milliseconds. """
    if input and (match := TIME_UNIT_VALUE_PATTERN.match(input)):
        value = parse_number(match.group('value'))
        if match.group('unit').lower() == 's':
            value *= 1000
        return max(value, 0)
    return None

def parse_speed(input: str) -> float:
    """ Parses a speed value from the given input string, clamps it and returns it in words per minute [wpm]. Returns
        `None` if the input string does not contain a valid speed value. Supported units are words per minute [wpm] and
        milliseconds per unit [ms]. Valid range is [1 wpm; 60 wpm]. """
    if input and (match := SPEED_UNIT_VALUE_PATTERN.match(input)):
        unit = match.group('unit')
        value = parse_number(match.group('value'))
        if unit.lower() == 'ms':
            if value <= 0:
                return None
            value = unit_ms_to_wpm(value)
        return clamp(value, 1, 60)
    return None

def parse_frequency(input: str, minimum: float, maximum: float) -> float:
    """ Parses a frequency value from the given input string, clamps it to the given range and returns it in
        Hertz [Hz]. Returns `None` if the input string does not contain a valid frequency value. Supported units are
        Hertz [Hz] and Kilohertz [kHz]. """
    if input and (match := FREQUENCY_UNIT_VALUE_PATTERN.match(input)):
        value = parse_number(match.group('value'))
        if match.group('unit').lower() == 'khz':
            value *= 1000
        return clamp(value, minimum, maximum)
    return None

def parse_tone_frequency(input: str) -> float:
    """ Parses a tone frequency value from the given input string, clamps it and returns it in Hertz [Hz]. Valid range
        is [100 Hz; 10 kHz]. """
    return parse_frequency(input, 100, 10000)

def parse_sample_rate(input: str) -> float:
    """ Parses a sample rate value from the given input string, clamps it and returns it in Hertz [Hz]. Valid range is
        [1 kHz; 192 kHz]. """
    return parse_frequency(input, 1000, 192000)

def parse_key_timeline(input: str) -> list[tuple[bool, float]] | None:
    """ Parses a key timeline, e.g. `+60ms -60ms +180ms -1s`, and returns a list of `(key_down, duration_ms)` tuples.
        `+` holds the key down for the given time and `-` leaves it up; values without unit are milliseconds. Returns
        `None` if any element of the timeline is invalid. """
    timeline = []
    for element in input.split():
        match = KEY_EVENT_PATTERN.match(element)
        if match is None:
            return None
        value = parse_number(match.group('value'))
        if (match.group('unit') or 'ms').lower() == 's':
            value *= 1000
        timeline.append((match.group('state') == '+', value))
    return timeline

def parse_color(input: str) -> str:
    """ Parses an ANSI color escape sequence from the given input string. Prefixes `fg:` and `bg:` for foreground and
        background respectively may be specified; if the prefix is omitted the color is thought to be used in the
        foreground. Supported formats are 4-bit terminal color indices (`0-7`), 8-bit terminal color indices (`0-255`),
        tuples that hold three 8-bit integers for red, green and blue (`0-255`) and hexadecimal color values with or
        without leading hash symbols, e.g. `#ff5f5f`. """
    foreground = True
    if input.lower().startswith('fg:'):
        input = input[3:]
    elif input.lower().startswith('bg:'):
        foreground = False
        input = input[3:]
    return color_to_ansi_escape(input, foreground = foreground)

def parse_text_case(input: str) -> TextCase | None:
    """ Parses a text case from the given input string. Returns a `TextCase` if the string represents a valid text case,
        `None` otherwise. """
    if input.lower() == 'none':
        return TextCase.NONE
    elif input.lower() == 'upper' or input.lower() == 'uc':
        return TextCase.UPPER
    elif input.lower() == 'lower' or input.lower() == 'lc':
        return TextCase.LOWER
    elif input.lower() == 'sentence':
        return TextCase.SENTENCE
    return None

def guess_input_format(input_value: str) -> str:
    """ Guesses the format of an input given without format prefix. """
    if MORSE_INPUT_PATTERN.fullmatch(input_value):
        return 'code'
    if parse_key_timeline(input_value):
        return 'keys'
    if os.path.isfile(input_value):
        return 'file'
    return 'text'

def normalize_format(format: str) -> str:
    return { 'k': 'keys', 'f': 'file', 'c': 'code', 't': 'text', 'p': 'progress', 's': 'sound',
             'w': 'wav' }.get(format, format)

def fail(message: str):
    print(f"Error: {message}", file = sys.stderr)
    sys.exit(1)

def parse_args(argv: list[str] = None):
    argv = list(sys.argv[1:] if argv is None else argv)
    debug_args = {}
    argi = 0

    # Perform some manual argument extraction, especially debug arguments that are not registered with argparse
    while argi < len(argv):
        arg = argv[argi]
        if arg == '--version':
            print(version.version_string_full)
            sys.exit(0)

        # Extract debug arguments
        if arg.startswith('-D'):
            debug_arg, debug_value = dual_split(arg[2:], '=')
            debug_args[debug_arg] = debug_value
            del argv[argi]
            continue

        argi += 1

    epilog = ('input formats:\n'
              '  k/keys: Key timeline, e.g. "+60ms -60ms +180ms -1s" (+ key down, - key up) to be decoded\n'
              '  f/file: File containing a key timeline to be decoded\n'
              '  c/code: Morse code (dots, dashes and spaces) to be played back\n'
              '  t/text: Latin text to be encoded and played back\n'
              'output formats:\n'
              '  t/text: Display the decoded text\n'
              '  p/progress: Display the countdown until the pending character and word space are committed\n'
              '  s/sound: Play the tone on the default audio output device\n'
              '  w/wav: Write the tone to a sound file; first argument specifies file path\n'
              'debug arguments:\n'
              '  -Dlog-level=<level>: One of debug, info, warning, error, critical')

    parser = argparse.ArgumentParser(prog = 'morsekey', usage = ('%(prog)s \x1b[3m[format:]\x1b[0m<data> '
                                                                 '--output <format>\x1b[3m[:args] [--output <format>'
                                                                 '[:args]] [options..]\x1b[0m'),
                                     epilog = epilog, formatter_class = argparse.RawTextHelpFormatter)

    parser.add_argument('input', type = str, nargs = 1, help = 'Input data or file')
    parser.add_argument('-c', '--color', metavar = '\x1b[3m<color>\x1b[0m', type = str, default = None,
                        action = 'store', help = 'Color used for the decoded text')
    parser.add_argument('-f', '--frequency', metavar = '\x1b[3m<frequency>\x1b[0m', type = str, default = '600hz',
                        action = 'store', help = 'Frequency of the tone, e.g. 600hz or 1.2kHz')
    parser.add_argument('-l', '--live', action = 'store_true',
                        help = 'Redraw text and progress on every update, including pending sequence and preview')
    parser.add_argument('-o', '--output', metavar = '\x1b[3m<format>\x1b[0m', type = str, required = True,
                        action = 'append', help = 'Output format')
    parser.add_argument('-p', '--plot', action = 'store_true',
                        help = 'Plot the tone and the commit countdown over time')
    parser.add_argument('-r', '--sample-rate', metavar = '\x1b[3m<rate>\x1b[0m', type = str, default = '8kHz',
                        action = 'store', help = 'Sample rate used to generate the tone')
    parser.add_argument('-s', '--speed', metavar = '\x1b[3m<speed>\x1b[0m', type = str, default = '20wpm',
                        action = 'store', help = 'Speed used for decoding and playback, e.g. 20wpm or 60ms')
    parser.add_argument('-t', '--tick', metavar = '\x1b[3m<time>\x1b[0m', type = str, default = '16ms',
                        action = 'store', help = 'Interval of countdown updates, e.g. 16ms')
    parser.add_argument('-v', '--volume', metavar = '\x1b[3m<volume>\x1b[0m', type = float, default = 0.9,
                        action = 'store', help = 'Volume of the tone')
    parser.add_argument('--realtime', action = argparse.BooleanOptionalAction, default = None,
                        help = 'Follow the wall clock; default is on if sound is played, off otherwise')
    parser.add_argument('--text-case', metavar = '\x1b[3m<case>\x1b[0m', type = str, default = 'upper',
                        action = 'store', help = 'Text case used for displaying decoded text: \x1b[1mupper\x1b[0m, '
                                                 'lower, sentence')
    parser.add_argument('--version', action = 'store_true', help = 'Prints the version and legal information')

    result = parser.parse_args(argv)

    # Parse input format
    result.input = result.input[0]
    if (match := ARGUMENT_VALUE_PATTERN.match(result.input)) and match.group('argument') in ALLOWED_INPUT_FORMATS:
        result.input_format = normalize_format(match.group('argument'))
        result.input_value = match.group('value')
    else:
        result.input_value = result.input
        result.input_format = guess_input_format(result.input_value)

    # Read key timeline from file
    if result.input_format == 'file':
        if not os.path.isfile(result.input_value):
            fail(f"Input file does not exist: {result.input_value}")
        with open(result.input_value, 'r') as file:
            result.input_value = file.read()
        result.input_format = 'keys'

    if result.input_format == 'keys':
        result.key_timeline = parse_key_timeline(result.input_value)
        if not result.key_timeline:
            fail("Key timeline is given in wrong format; example: +60ms -60ms +180ms -1s")

    # Parse output formats
    output_formats = {}
    for elem in result.output:
        for format_args in elem.split(','):
            format, args = dual_split(format_args, ':')
            if format not in ALLOWED_OUTPUT_FORMATS:
                fail(f"Invalid output format: {format}\nSupported formats: {', '.join(ALLOWED_OUTPUT_FORMATS)}")
            format = normalize_format(format)
            if format not in output_formats:
                output_formats[format] = args.split(':') if args is not None else []
    result.output = output_formats

    if 'wav' in result.output and len(result.output['wav']) == 0:
        fail("Output format 'w/wav' requires an output file name as a first argument! Example: wav:path/to/file.wav")

    # Parse color
    if result.color is not None:
        if (color := parse_color(result.color)) is not None:
            result.color = color
        else:
            fail(f"Argument to --color specified an invalid value: {result.color}")

    # Parse text case
    if (text_case := parse_text_case(result.text_case)) is not None:
        result.text_case = text_case
    else:
        fail("Argument to --text-case must be either one of 'none', 'upper', 'lower' or 'sentence'")

    # Parse speed
    if (speed := parse_speed(result.speed)) is not None:
        result.speed = speed
    else:
        fail("Argument to --speed is given in wrong format")

    # Parse frequency
    if (frequency := parse_tone_frequency(result.frequency)) is not None:
        result.frequency = frequency
    else:
        fail("Argument to --frequency is given in wrong format")

    # Parse sample rate
    if (sample_rate := parse_sample_rate(result.sample_rate)) is not None:
        result.sample_rate = int(sample_rate)
    else:
        fail("Argument to --sample-rate is given in wrong format")

    # Parse tick
    if (tick := parse_time_ms(result.tick)) is not None and tick > 0:
        result.tick = tick
    else:
        fail("Argument to --tick is given in wrong format")

    # Parse volume
    result.volume = clamp(result.volume, 0, 1)

    # Real time defaults to on if sound is played
    if result.realtime is None:
        result.realtime = 'sound' in result.output

    # Parse log level
    log_level = (debug_args.get('log-level') or 'warning').lower()
    if log_level not in ALLOWED_LOG_LEVELS:
        fail(f"Debug argument log-level must be one of {', '.join(ALLOWED_LOG_LEVELS)}")
    result.log_level = getattr(logging, log_level.upper())

    # Assign debug arguments
    result.debug_args = debug_args
    return result
