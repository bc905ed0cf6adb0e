"""Tests for `sklearn_drsa.extra`."""

import matplotlib
import pytest

from sklearn_drsa.distributions import DominanceConesDecisionDistributions
from sklearn_drsa.dominance import DominanceCones

from .datasets import three_objects_gain, empty_table

matplotlib.use('Agg')


@pytest.fixture
def extra():
    from sklearn_drsa import extra
    yield extra
    import matplotlib.pyplot as plt
    plt.close('all')


def test_plot_decision_distributions(extra):
    table = three_objects_gain().table
    distributions = DominanceConesDecisionDistributions(table)
    figure = extra.plot_decision_distributions(distributions, 'negative_d',
                                               title="three objects")
    axes = figure.axes[0]
    assert len(axes.patches) == 3 * 2  # objects * decisions
    assert [text.get_text() for text in axes.get_legend().get_texts()] \
        == ['hi', 'lo']
    assert "three objects" in [text.get_text() for text in figure.texts]


def test_plot_decision_distributions_empty(extra):
    distributions = DominanceConesDecisionDistributions(empty_table().table)
    figure = extra.plot_decision_distributions(distributions)
    assert len(figure.axes[0].patches) == 0


def test_plot_cone_sizes(extra):
    cones = DominanceCones(three_objects_gain().table)
    figure = extra.plot_cone_sizes(cones)
    lines = figure.axes[0].get_lines()
    assert len(lines) == 4
    assert list(lines[0].get_ydata()) == [3, 2, 2]  # positive D cones
