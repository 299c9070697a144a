from collections import namedtuple
from matplotlib.gridspec import GridSpec
import numpy as np
import matplotlib.pyplot as plt
import json
import pickle

Data = namedtuple('Data', 'lengths capacities growth_points')


class Logger:
    def __init__(self, params, folder=''):
        self.params = params
        self.folder = folder
        self.logs = {}

    def add(self, names, values):
        self.logs = dict(zip(names, values))

    def filename(self):
        # File name is built from the experiment parameters
        filename = '_'.join(self.params)
        if self.folder:
            filename = f'{self.folder}/{filename}'
        return filename

    def save(self):
        filename = self.filename()

        # Extract trace data.
        lengths = self.logs.pop('lengths')
        capacities = self.logs.pop('capacities')
        growth_points = self.logs.pop('growth_points')

        # Save rest to json file.
        print(f'Saving results to "{filename}.json"')
        with open(filename + '.json', 'w', encoding='utf-8') as f:
            json.dump(self.logs, f, indent=4)

        # Save plotting data, and plot plotting data.
        data = Data(lengths, capacities, growth_points)
        print(f'Saving plotting data to "{filename}.data"')
        with open(filename + '.data', 'wb') as f:
            pickle.dump(data, f)

        fig = self.plot_data(data)
        fig.savefig(f'{filename}.svg')
        plt.close(fig)
        return filename

    def plot_data(self, data):
        """ Plot length and capacity against the number of pushes. """
        fig = plt.figure(constrained_layout=True)
        fig.set_size_inches(12, 5)

        gs = GridSpec(1, 2, figure=fig)

        ax_capacity = fig.add_subplot(gs[0, 0])
        ax_slack = fig.add_subplot(gs[0, 1])

        pushes = np.arange(1, len(data.lengths) + 1)
        ax_capacity.step(pushes, data.capacities, where='post', label='capacity')
        ax_capacity.plot(pushes, data.lengths, label='length')
        for point in data.growth_points:
            ax_capacity.axvline(point, color='grey', alpha=0.3, linewidth=0.5)
        ax_capacity.set_title(f'Length and capacity ({len(data.growth_points)} growths)')
        ax_capacity.legend()

        # Unused placeholder slots
        slack = np.asarray(data.capacities) - np.asarray(data.lengths)
        ax_slack.plot(pushes, slack)
        ax_slack.set_title('Unused slots')

        ax_capacity.set(xlabel='Pushes', ylabel='Slots')
        ax_slack.set(xlabel='Pushes')
        return fig
