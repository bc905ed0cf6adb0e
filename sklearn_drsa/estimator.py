"""
Dominance-based rough set analysis: scikit-learn estimator front end.
"""

from typing import Set

import numpy as np

from sklearn.base import BaseEstimator
from sklearn.utils.validation import check_is_fitted

from sklearn_drsa.data import DecisionDistribution, InformationTable
from sklearn_drsa.distributions import DominanceConesDecisionDistributions
from sklearn_drsa.dominance import ConeFamily, DominanceConeCalculator
from sklearn_drsa.evaluation import MissingValueType


# noinspection PyAttributeOutsideInit
class DominanceConesEstimator(BaseEstimator):
    """Compute the decision distributions within the dominance cones of the
    objects given by `X` and their classes `y`.

    Each feature is a condition attribute, `y` is an ordinal decision
    attribute. Object `a` dominates object `b` iff `a` is at least as good as
    `b` on every feature.

    Parameters
    -----
    preference_types : None or str or sequence of str
        Preference type of the features, each one of 'gain' (higher is
        better), 'cost' (lower is better), 'none' (nominal, only equality
        counts). A single value applies to all features, None means 'gain'.

    missing_value_type : {'mv2', 'mv15'}
        How NaN in `X` is compared, see `sklearn_drsa.evaluation`.

    decision_order : None or array-like
        The classes ordered from worst to best. If None, `np.unique(y)`.

    only_necessary : bool
        Compute only the distributions of negative D and positive inverse D
        cones.

    implementation : {'numpy', 'python'}
        Algorithm computing the cones, see
        `DominanceConesDecisionDistributions`.

    n_jobs : int or None
        Number of jobs used by the 'python' implementation.

    Attributes
    -----
    information_table_ : InformationTable
        The table built from `X` and `y`.

    distributions_ : DominanceConesDecisionDistributions

    classes_ : np.ndarray
        The classes in ascending order of preference.

    n_features_in_ : int
    """

    def __init__(self,
                 preference_types=None,
                 missing_value_type='mv2',
                 decision_order=None,
                 only_necessary=False,
                 implementation='numpy',
                 n_jobs=None):
        self.preference_types = preference_types
        self.missing_value_type = missing_value_type
        self.decision_order = decision_order
        self.only_necessary = only_necessary
        self.implementation = implementation
        self.n_jobs = n_jobs

    def fit(self, X, y):
        """Build the information table of `X` and `y` and compute the
        decision distributions of all dominance cones.
        """
        try:
            missing_value_type = MissingValueType(self.missing_value_type)
        except ValueError:
            raise ValueError("missing_value_type must be one of 'mv2', 'mv15', "
                             "got {!r}".format(self.missing_value_type)) \
                from None
        if self.implementation not in ('numpy', 'python'):
            raise ValueError("implementation must be 'numpy' or 'python', "
                             "got {!r}".format(self.implementation))

        self.information_table_ = InformationTable.from_array(
            X, y,
            preference_types=self.preference_types,
            missing_value_type=missing_value_type,
            decision_order=self.decision_order)
        self.n_features_in_ = np.asarray(X).shape[1]
        self.classes_ = np.asarray(self.decision_order) \
            if self.decision_order is not None else np.unique(y)
        self.distributions_ = DominanceConesDecisionDistributions(
            self.information_table_,
            only_necessary=self.only_necessary,
            implementation=self.implementation,
            n_jobs=self.n_jobs)
        return self

    def decision_distribution(self, x: int, family='negative_d'
                              ) -> DecisionDistribution:
        """:return: The decision distribution of the cone of `family` with
            origin `x`.
        """
        check_is_fitted(self, 'distributions_')
        return self.distributions_.get_distribution(ConeFamily(family), x)

    def cone(self, x: int, family='negative_d') -> Set[int]:
        """:return: Indices of the objects in the cone of `family` with origin
            `x`.
        """
        check_is_fitted(self, 'information_table_')
        return DominanceConeCalculator.cone(x, self.information_table_,
                                            ConeFamily(family))

    def class_counts(self, family='negative_d') -> np.ndarray:
        """:return: Array of shape (n_objects, n_classes) holding for each
            object how many objects of each class of `classes_` are in its
            cone of `family`.
        """
        check_is_fitted(self, 'distributions_')
        table = self.information_table_
        decision_by_class = {}
        for decision in table.decisions or ():
            decision_by_class.setdefault(str(decision), decision)
        counts = np.zeros((table.n_objects, len(self.classes_)), dtype=int)
        for x in range(table.n_objects):
            distribution = self.decision_distribution(x, family)
            for c, label in enumerate(self.classes_):
                decision = decision_by_class.get(str(label))
                if decision is not None:
                    counts[x, c] = distribution.get_count(decision)
        return counts
