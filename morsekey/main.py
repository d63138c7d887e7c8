from morsekey.args import fail, parse_args
from morsekey.errors import MorseKeyError
from morsekey.morse import morse_to_text, text_to_morse
from morsekey.plot import plot_timeline, ProgressRecorder
from morsekey.printers import ProgressPrinter, TextPrinter
from morsekey.schedule import Scheduler
from morsekey.session import MorseSession
from morsekey.tone import MultiToneDriver, PyAudioTone, ToneFileWriter, ToneRecorder
from morsekey.utils import preprocess_input_code, preprocess_input_text
import logging
import sys

def decode_key_timeline(session: MorseSession, key_timeline: list[tuple[bool, float]], realtime: bool):
    """ Feeds the given key timeline into the session and waits until the last character and word space are
        committed. """
    for key_down, duration_ms in key_timeline:
        if key_down:
            session.press()
        else:
            session.release()
        session.wait(duration_ms, realtime = realtime)
    session.release()
    session.run_until_idle(realtime = realtime)

def play_code(session: MorseSession, code: str, realtime: bool):
    session.play(code)
    session.run_until_idle(realtime = realtime)

def main(argv: list[str] = None):
    args = parse_args(argv)
    logging.basicConfig(level = args.log_level, format = '%(levelname)s %(name)s: %(message)s')

    scheduler = Scheduler()

    # Create the tone drivers
    drivers = []
    sound_tone = None
    file_writer = None
    tone_recorder = None
    if 'sound' in args.output:
        sound_tone = PyAudioTone(frequency = args.frequency, volume = args.volume, sample_rate = args.sample_rate)
        drivers.append(sound_tone)
    if 'wav' in args.output:
        file_path = args.output['wav'][0]
        file_writer = ToneFileWriter(file = file_path, clock = scheduler.now, volume = args.volume,
                                     frequency = args.frequency, sample_rate = args.sample_rate)
        drivers.append(file_writer)
        print(f"Writing to sound file {file_path}")
    if args.plot:
        tone_recorder = ToneRecorder(scheduler.now)
        drivers.append(tone_recorder)

    try:
        session = MorseSession(wpm = args.speed, tone = MultiToneDriver(*drivers), scheduler = scheduler,
                               tick_ms = args.tick)
    except MorseKeyError as e:
        fail(str(e))

    # Create the output devices
    text_printer = None
    if 'text' in args.output:
        text_printer = TextPrinter(output_device = sys.stdout, text_case = args.text_case, show_pending = args.live)
        if args.color is not None:
            text_printer.set_color(args.color)
        session.decoder().decode_stream().subscribe(text_printer)

    if 'progress' in args.output:
        session.decoder().progress_stream().subscribe(ProgressPrinter(output_device = sys.stdout, redraw = args.live))

    progress_recorder = None
    if args.plot:
        progress_recorder = ProgressRecorder(scheduler.now)
        session.decoder().progress_stream().subscribe(progress_recorder)

    try:
        if args.input_format == 'keys':
            decode_key_timeline(session, args.key_timeline, args.realtime)
        else:
            # The echoed code keeps its word separators; playback only knows character pauses
            if args.input_format == 'code':
                echoed_code = ' '.join(args.input_value.split())
                code = preprocess_input_code(args.input_value)
            else:
                echoed_code = text_to_morse(preprocess_input_text(args.input_value))
                code = text_to_morse(preprocess_input_text(args.input_value), word_separator = ' ')
            if text_printer is not None:
                print(f"{echoed_code}\n{morse_to_text(echoed_code)}")
            play_code(session, code, args.realtime)
    except KeyboardInterrupt:
        session.cancel_playback()
        session.advance(0)
    except MorseKeyError as e:
        fail(str(e))
    finally:
        if file_writer is not None:
            file_writer.close()
        if sound_tone is not None:
            # Let the release of the last tone fade out before closing the device
            session.wait(args.tick, realtime = True)
            sound_tone.close()

    if text_printer is not None and args.input_format == 'keys':
        print()

    if tone_recorder is not None:
        plot_timeline(tone_recorder.transitions(), progress_recorder.updates(), scheduler.now(),
                      title = f'Key Timeline ({args.speed:g} wpm)')

if __name__ == '__main__':
    sys.exit(main())
