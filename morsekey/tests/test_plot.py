import matplotlib
matplotlib.use('Agg')

from morsekey.events import ProgressStage, ProgressUpdate
from morsekey.plot import plot_timeline, ProgressRecorder, tone_curve
from morsekey.schedule import Scheduler
import numpy as np
import os
import tempfile
import unittest

class PlotTests(unittest.TestCase):
    def test_progress_recorder(self):
        scheduler = Scheduler()
        recorder = ProgressRecorder(scheduler.now)
        recorder.receive(ProgressUpdate(0, ProgressStage.RESET))
        scheduler.advance(16)
        recorder.receive(ProgressUpdate(10, ProgressStage.CHAR_LOCK))
        recorder.receive('ignored')
        self.assertEqual([(0, ProgressUpdate(0, ProgressStage.RESET)), (16, ProgressUpdate(10, ProgressStage.CHAR_LOCK))],
                         recorder.updates())

    def test_tone_curve(self):
        times, levels = tone_curve([(10, True), (70, False)], 100)
        np.testing.assert_array_equal([0, 10, 10, 70, 70, 100], times)
        np.testing.assert_array_equal([0, 0, 1, 1, 0, 0], levels)

        times, levels = tone_curve([], 50)
        np.testing.assert_array_equal([0, 50], times)
        np.testing.assert_array_equal([0, 0], levels)

    def test_plot_timeline(self):
        transitions = [(0, True), (60, False), (120, True), (300, False)]
        updates = [(316, ProgressUpdate(16 / 180 * 100, ProgressStage.CHAR_LOCK)),
                   (492, ProgressUpdate(5, ProgressStage.WORD_GAP)),
                   (732, ProgressUpdate(100, ProgressStage.DONE))]
        with tempfile.TemporaryDirectory() as directory:
            file_path = os.path.join(directory, 'timeline.png')
            plot_timeline(transitions, updates, 732, file = file_path)
            self.assertTrue(os.path.isfile(file_path))
            self.assertGreater(os.path.getsize(file_path), 0)
