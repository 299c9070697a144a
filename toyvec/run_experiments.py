import argparse
import datetime
import time
from datetime import timedelta
from pathlib import Path
import numpy as np
from tqdm import trange
from toyvec.utils.dynamicarray import DynamicArray
from toyvec.utils.logger import Logger

DTYPES = ['object', 'uint32', 'int64', 'float64']


def make_values(size, dtype):
    """ Values to push: labelled strings for object arrays, a range otherwise. """
    if np.dtype(dtype).kind == 'O':
        return [f'value{i}' for i in range(size)]
    return np.arange(size, dtype=dtype)


def run_experiment(size, dtype, initial_capacity=0, verbose=True):
    """ Push `size` values and trace length and capacity after every push.

    Returns a dict of results, including whether a cursor read every value
    back in order once all growths had happened.
    """
    start = time.time()
    array = DynamicArray.with_capacity(initial_capacity, dtype=dtype)
    values = make_values(size, dtype)

    lengths = np.zeros(size, dtype=np.int64)
    capacities = np.zeros(size, dtype=np.int64)
    growth_points = []
    with trange(size, disable=not verbose) as t:
        for i in t:
            capacity = array.capacity()
            array.push(values[i])
            if array.capacity() != capacity:
                growth_points.append(i + 1)
            lengths[i] = len(array)
            capacities[i] = array.capacity()
            t.set_description(f'Size {size} ({dtype})')
            t.set_postfix(capacity=array.capacity(), growths=len(growth_points))

    # Read everything back through a cursor
    n_read, in_order = 0, True
    for x, value in zip(array.iter(), values):
        in_order = in_order and x == value
        n_read += 1

    duration = time.time() - start
    return {
        'size': size,
        'dtype': dtype,
        'initial_capacity': initial_capacity,
        'final_capacity': int(array.capacity()),
        'n_growths': len(growth_points),
        'n_read': n_read,
        'in_order': bool(in_order and n_read == size),
        'duration': str(timedelta(seconds=duration)),
        'lengths': lengths,
        'capacities': capacities,
        'growth_points': growth_points,
    }


def run_experiments(experiment_name, sizes, dtypes, initial_capacity, no_logging,
                    verbose=True, root='experiments'):
    """ Run series of growth experiments.

    Example
    -------
    Trace 100000 pushes onto object and uint32 arrays:
    python -m toyvec.run_experiments --sizes 100000 --dtypes object uint32

    """
    path = None
    if not no_logging:
        Path(root).mkdir(parents=True, exist_ok=True)
        date = datetime.datetime.now().strftime("%Y-%m-%d-%H:%M:%S")
        path = Path(f'{root}/{date}_{experiment_name}')
        path.mkdir(exist_ok=True)

    results = []
    for size in sizes:
        for dtype in dtypes:
            if verbose:
                print(
                    f'Starting experiment: Experiment(size={size}, dtype={dtype}, initial_capacity={initial_capacity})')
            result = run_experiment(size, dtype, initial_capacity, verbose)
            if verbose:
                print(
                    f"Capacity: {result['final_capacity']}\tGrowths: {result['n_growths']}\tIn order: {result['in_order']}")
            if path is not None:
                params = [f'Size{size}', dtype, f'Init{initial_capacity}']
                logger = Logger(params, folder=str(path))
                logger.add(list(result.keys()), list(result.values()))
                logger.save()
            results.append(result)
    return results


parser = argparse.ArgumentParser(description='Trace growth of DynamicArray.')

parser.add_argument('--exp-name', type=str, default='',
                    help='Experiment name')
parser.add_argument('--sizes', type=int, nargs='+', default=[1000],
                    help='Number of values to push')
parser.add_argument('--dtypes', type=str, nargs='+', default=['object'],
                    choices=DTYPES, help='Element dtype')
parser.add_argument('--initial-capacity', type=int, default=0,
                    help='Capacity before the first push (default=0)')
parser.add_argument('--no-logging', dest='no_logging',
                    action='store_true', help='Do not save results.')
parser.add_argument('--quiet', dest='verbose', action='store_false',
                    help='No progress output.')


if __name__ == '__main__':
    args = parser.parse_args()
    run_experiments(args.exp_name, args.sizes, args.dtypes,
                    args.initial_capacity, args.no_logging, args.verbose)
