"""
Dominance-based rough set analysis:
Plotting helpers in addition to the computations in `distributions.py`.
"""

from typing import Hashable, Optional, Sequence, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure  # needed only for type hints

from sklearn_drsa.distributions import \
    DominanceConesDecisionClassDistributions, DominanceConesDecisionDistributions
from sklearn_drsa.dominance import ConeFamily, DominanceCones


def plot_decision_distributions(
        distributions: Union[DominanceConesDecisionDistributions,
                             DominanceConesDecisionClassDistributions],
        family='negative_d',
        decisions: Optional[Sequence[Hashable]] = None,
        title: Optional[str] = None,
        figure: Optional[Figure] = None,
) -> Figure:
    """Draw the decision distribution of each object's cone as stacked bars.

    :param distributions: The decision (or decision class) distributions to
      draw.
    :param family: The `ConeFamily` (or its value) to draw. Needs to be
      available in `distributions`.
    :param decisions: The keys to stack, bottom first. If None, all keys
      present, sorted by their string representation.
    :param title: string or None. If not None, set figure title.
    :param figure: If None, use `plt.figure()` to create a figure.
    :return: The figure drawn into.
    """
    family = ConeFamily(family)
    per_object = [distributions.get_distribution(family, x)
                  for x in range(distributions.n_objects)]
    if decisions is None:
        decisions = sorted(set().union(*(d.decisions for d in per_object)),
                           key=str)
    counts = np.array([[distribution.get_count(decision)
                        for decision in decisions]
                       for distribution in per_object],
                      dtype=int).reshape(len(per_object), len(decisions))

    if figure is None:
        figure = plt.figure()
    axes = figure.add_subplot(1, 1, 1)
    axes.set_xlabel('origin object')
    axes.set_ylabel('objects in %s cone' % family.value)
    objects = np.arange(len(per_object))
    bottom = np.zeros(len(per_object), dtype=int)
    for i, decision in enumerate(decisions):
        axes.bar(objects, counts[:, i], bottom=bottom, label=str(decision))
        bottom += counts[:, i]
    if len(decisions):
        axes.legend(title='decision')
    if title is not None:
        figure.suptitle(title)
    return figure


def plot_cone_sizes(cones: DominanceCones,
                    title: Optional[str] = None,
                    figure: Optional[Figure] = None) -> Figure:
    """Draw the cardinality of the cones of each family, per origin object.

    :return: The figure drawn into.
    """
    if figure is None:
        figure = plt.figure()
    axes = figure.add_subplot(1, 1, 1)
    axes.set_xlabel('origin object')
    axes.set_ylabel('cone size')
    objects = np.arange(cones.n_objects)
    for family in ConeFamily:
        axes.plot(objects, cones.cone_sizes(family), marker='o',
                  label=family.value)
    axes.legend()
    if title is not None:
        figure.suptitle(title)
    return figure
