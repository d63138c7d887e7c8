version = '0.1.0'
version_string = f'morsekey {version}'
version_string_full = (f'{version_string}\n'
                       'Decodes Morse code from timed key presses and plays Morse code back as tone pulses.\n'
                       'MIT license')
