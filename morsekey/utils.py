import re

HEX_COLOR_PATTERN = re.compile(r'#?(?:[0-9a-fA-F]{3}){1,2}')

class Color:
    BLACK = 0
    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    WHITE = 7

class TextCase:
    NONE = 0
    UPPER = 1
    LOWER = 2
    SENTENCE = 3

def hexcolor_to_rgb(hex_color: str):
    if hex_color.startswith('#'):
        hex_color = hex_color.lstrip('#')
    if len(hex_color) == 3:
        hex_color = "".join(c * 2 for c in hex_color)
    return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))

def hexcolor_to_ansi_escape_24bit(hex_color: str, foreground: bool = True) -> str:
    r, g, b = hexcolor_to_rgb(hex_color)
    prefix = 38 if foreground else 48
    return f'\x1b[{prefix};2;{r};{g};{b}m'

def color_to_ansi_escape(color: int | tuple[int, int, int] | str, foreground: bool = True) -> str:
    p = 3 if foreground else 4
    if isinstance(color, str) and color.isdigit():
        color = int(color)
    if isinstance(color, int):
        if 0 <= color <= 7:
            return f'\x1b[{p}{color}m'
        elif 9 <= color <= 255:
            return f'\x1b[{p}8;5;{color}m'
    elif isinstance(color, tuple) and len(color) == 3:
        r, g, b = color
        return f'\x1b[{p}8;2;{r};{g};{b}m'
    elif isinstance(color, str):
        parts = color.split(',')
        if len(parts) == 3:
            r = parts[0].strip()
            g = parts[1].strip()
            b = parts[2].strip()
            if r.isdigit() and g.isdigit() and b.isdigit():
                r, g, b = clamp(int(r), 0, 255), clamp(int(g), 0, 255), clamp(int(b), 0, 255)
                return f'\x1b[{p}8;2;{r};{g};{b}m'
        elif len(parts) == 1 and color.startswith('\x1b['):
            return color
        elif len(parts) == 1 and HEX_COLOR_PATTERN.fullmatch(color):
            return hexcolor_to_ansi_escape_24bit(color, foreground = foreground)
    return None

def clamp(value: int | float, minimum: int | float, maximum: int | float):
    return min(max(value, minimum), maximum)

def apply_text_case(text: str, text_case: TextCase) -> str:
    """ Returns `text` converted into the given text case. Sentence case capitalizes the first letter of the text and
        every first letter following a full stop. """
    if text_case == TextCase.UPPER:
        return text.upper()
    elif text_case == TextCase.LOWER:
        return text.lower()
    elif text_case == TextCase.SENTENCE:
        result = ''
        new_sentence = True
        for char in text:
            if new_sentence and char.isalpha():
                result += char.upper()
                new_sentence = False
            else:
                result += char.lower()
                new_sentence |= char == '.'
        return result
    return text

CONSECUTIVE_SPACES_PATTERN = re.compile(r'\s{2,}')

def preprocess_input_code(code: str) -> str:
    """ Strips leading and trailing white spaces, converts word pauses (slashes) into character pauses and reduces
        multiple inner white spaces to single white spaces. """
    result = code.replace('/', ' ').strip()
    return CONSECUTIVE_SPACES_PATTERN.sub(' ', result)

def preprocess_input_text(text: str) -> str:
    """ Converts all occurrences of eszetts to its two-letter equivalent and the text to upper case. """
    return text.upper().replace('ß', 'SS')

def dual_split(input: str, separator: str) -> list:
    """ Splits the given input string into two parts: the part before the given separator and the part after the given
        separator. If no separator can be found, returns `input` as the first part and `None` as the second part. """
    elements = input.split(sep = separator, maxsplit = 1)
    if len(elements) == 1:
        elements.append(None)
    return elements
