from typing import Callable
from morsekey.events import ProgressStage, ProgressUpdate
from morsekey.streams import StreamReceiver
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker
import numpy as np

class ProgressRecorder(StreamReceiver):
    """ A stream receiver that keeps every progress update together with the time given by `clock` (in
        milliseconds). """
    def __init__(self, clock: Callable[[], float]):
        super().__init__()
        self._clock = clock
        self._updates: list[tuple[float, ProgressUpdate]] = []

    def receive(self, data: ProgressUpdate):
        if isinstance(data, ProgressUpdate):
            self._updates.append((self._clock(), data))

    def updates(self) -> list[tuple[float, ProgressUpdate]]:
        return self._updates

def tone_curve(transitions: list[tuple[float, bool]], end_ms: float) -> tuple[np.ndarray, np.ndarray]:
    """ Returns times and levels (0 or 1) of a step curve of the given tone transitions, starting silent at 0 ms. """
    times = [0.0]
    levels = [0.0]
    for time_ms, active in transitions:
        times.extend([time_ms, time_ms])
        levels.extend([levels[-1], 1.0 if active else 0.0])
    times.append(max(end_ms, times[-1]))
    levels.append(levels[-1])
    return np.array(times), np.array(levels)

def plot_timeline(transitions: list[tuple[float, bool]], progress_updates: list[tuple[float, ProgressUpdate]],
                  end_ms: float, title: str = 'Key Timeline', file: str = None):
    """ Plots the tone as a step curve and the commit countdown as progress over time. Shows the plot or, if `file` is
        given, saves it to that file. """
    fig, ax1 = plt.subplots(figsize = (16, 5))
    plt.subplots_adjust(left = 0.05, right = 0.95, top = 0.85, bottom = 0.2)
    ax1.set_title(title, pad = 20, size = 17, fontweight = 'bold')
    ax1.xaxis.set_major_locator(ticker.MaxNLocator(15))
    ax1.set_xlabel('Time [ms]')
    ax1.set_ylabel('Tone')
    ax1.set_ylim(ymin = 0, ymax = 1.1)
    ax1.set_xlim(left = 0, right = max(end_ms, 1))

    times, levels = tone_curve(transitions, end_ms)
    ax1.plot(times, levels, label = 'Tone', color = '#ff5f5f')
    ax1.fill_between(times, levels, 0, color = '#ff5f5f', alpha = 0.2)

    ax2 = ax1.twinx()
    ax2.set_ylabel('Progress [%]')
    ax2.set_ylim(ymin = 0, ymax = 110)
    for stage, color in ((ProgressStage.CHAR_LOCK, '#2bc49a'), (ProgressStage.WORD_GAP, '#f0c47e')):
        points = [(time_ms, update.progress) for time_ms, update in progress_updates if update.stage == stage]
        if points:
            ax2.scatter([p[0] for p in points], [p[1] for p in points], s = 4, label = stage, color = color)

    lines1, labels1 = ax1.get_legend_handles_labels()
    lines2, labels2 = ax2.get_legend_handles_labels()
    ax1.legend(lines1 + lines2, labels1 + labels2, loc = 'upper center', bbox_to_anchor = (0.5, -0.12), ncol = 3)

    if file is not None:
        fig.savefig(file)
        plt.close(fig)
    else:
        plt.show()
