from setuptools import setup, find_packages

setup(
    name = 'morsekey',
    version = '0.1.0',
    description = ('Morsekey is a command line utility program and library that decodes Morse code from timed key '
                   'presses in real time and plays Morse code back as tone pulses'),
    license = 'MIT license',
    keywords = 'morse morse-code morse-key morse-decoder morse-trainer cw telegraph',
    classifiers = [
        'Development Status :: 3 - Alpha',
        'Environment :: Console',
        'Intended Audience :: Education',
        'Intended Audience :: Other Audience',
        'Intended Audience :: Telecommunications Industry',
        'License :: OSI Approved :: MIT License',
        'Natural Language :: English',
        'Operating System :: MacOS',
        'Operating System :: Microsoft :: Windows',
        'Operating System :: Unix',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: Communications',
        'Topic :: Communications :: Ham Radio',
        'Topic :: Education',
        'Topic :: Utilities'
    ],
    packages = find_packages(exclude = ['*.tests']),
    python_requires = '>=3.10',
    install_requires = [
        'matplotlib',
        'numpy',
        'pyaudio',
        'soundfile',
    ],
    extras_require = {
        'test': [
            'pytest',
        ],
    },
    entry_points = {
        'console_scripts': [
            'morsekey = morsekey.main:main',
        ],
    },
)
