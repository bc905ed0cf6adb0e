"""
Measure & plot runtime of computing the dominance cone decision distributions
with various object and feature counts.
"""

import logging
import sys
import timeit
from typing import Iterable, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

logger = logging.getLogger('cone_runtime_scaling')


def time_distributions(implementation: str, table_args: str
                       ) -> Optional[Sequence[float]]:
    setup = ';\n'.join((
        "from sklearn_drsa.distributions import "
        "DominanceConesDecisionDistributions",
        "from sklearn_drsa.tests import datasets",
        "table = datasets.random_table(%s).table" % table_args))
    stmt = "DominanceConesDecisionDistributions(table, " \
           "implementation=%r)" % implementation
    timer = timeit.Timer(stmt, setup)
    try:
        ti_number, raw_autorange_timing = timer.autorange()
        raw_timings = timer.repeat(number=ti_number) + [raw_autorange_timing]
    except ValueError:
        logger.exception("timing failed for %s", table_args)
        return None
    return sorted(timing / ti_number for timing in raw_timings)


def n_objects_gen(max=np.inf) -> Iterable[int]:
    mg = 1
    while mg * 50 < max:
        for t in (10, 20, 50):
            yield t * mg
        mg *= 10


def timing_for_param(implementation: str,
                     max_objects: int = np.inf) -> Iterable:
    for n_objects in n_objects_gen(max_objects):
        for n_features in (1, 2, 4, 8, 16):
            argstr = "n_objects=%d, n_features=%d" % (n_objects, n_features)
            timings = time_distributions(implementation, argstr)
            if timings:
                logger.debug("%s: %s", argstr, timings[0])
                yield n_objects, n_features, timings


def plot_timings(timings, title=None, figure=None):
    from matplotlib.ticker import LogLocator
    if figure is None:
        figure: plt.Figure = plt.figure()
    axes = figure.add_subplot(1, 1, 1)
    axes.set_xlabel('n_objects')
    axes.set_ylabel('time[s]')
    if title is not None:
        axes.set_title(title)
    n_objects = timings.T[0]
    n_features = timings.T[1]
    tm_min = timings.T[2]
    for n in np.unique(n_features):
        mask = n_features == n
        axes.loglog(n_objects[mask], tm_min[mask], '.-', label=str(int(n)))
    axes.legend(title='n_features')
    axes.grid(True)
    figure.tight_layout()
    axes.yaxis.set_major_locator(LogLocator(subs='all'))
    return figure


if __name__ == "__main__":
    logging.basicConfig(format='%(asctime)s:' + logging.BASIC_FORMAT,
                        level=logging.INFO)
    logging.captureWarnings(True)
    implementation = 'python' if 'python' in sys.argv[1:] else 'numpy'
    max_objects = 1000 if implementation == 'python' else 10000

    logger.info("start timing of %s implementation", implementation)
    print("n_objects, n_features, timings...")
    all_timings = []
    try:
        for n_objects, n_features, timings in timing_for_param(implementation,
                                                               max_objects):
            onelist = [n_objects, n_features] + timings
            all_timings.append(onelist)
            print('[' + ",".join([str(x) for x in onelist]) + '],')
    except KeyboardInterrupt:
        pass
    logger.info("stop timing of %s implementation, got %d timings",
                implementation, len(all_timings))
    if all_timings:
        logger.info("plotting")
        plot_timings(np.array(all_timings),
                     'runtime of %s implementation' % implementation)
        plt.show()
