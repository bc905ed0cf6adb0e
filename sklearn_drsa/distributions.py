"""
Dominance-based rough set analysis:
Decision distributions within the dominance cones of all objects of an
information table.

For every object `x` and every computed `ConeFamily`, the objects of the cone
of origin `x` are counted by their decision (or by their decision class). The
histograms are built eagerly, in O(n_objects²) comparisons, and read-only
afterwards.
"""

import warnings
from abc import ABC, abstractmethod
from typing import Dict, FrozenSet, Hashable, List, Optional, Sequence

import numpy as np
from joblib import Parallel, delayed

from sklearn_drsa.data import DecisionDistribution, InformationTable
from sklearn_drsa.dominance import ConeFamily, dominance_matrices
from sklearn_drsa.util import check_object_index

#: The families needed by the necessary-only mode.
NECESSARY_FAMILIES: FrozenSet[ConeFamily] = frozenset({
    ConeFamily.POSITIVE_INV_D, ConeFamily.NEGATIVE_D})

#: Order in which the families are computed.
_FAMILY_ORDER = (ConeFamily.POSITIVE_INV_D, ConeFamily.NEGATIVE_D,
                 ConeFamily.POSITIVE_D, ConeFamily.NEGATIVE_INV_D)


class DistributionNotAvailableError(LookupError):
    """A cone family was requested which was not computed, because the
    distributions were built in necessary-only mode.
    """


def _python_cone_distribution(x: int, table: InformationTable,
                              family: ConeFamily,
                              keys: Sequence[Hashable]) -> DecisionDistribution:
    distribution = DecisionDistribution()
    for y in range(table.n_objects):
        if family.contains(x, y, table):
            distribution.increase_count(keys[y])
    return distribution


class _BaseDominanceConesDistributions(ABC):
    """Histograms of the cones of all objects of an information table.

    Parameters
    -----
    table : InformationTable

    only_necessary : bool
        If True, compute only the histograms of positive inverse D cones and
        negative D cones, which is what rough approximations need. Accessing
        another family then raises `DistributionNotAvailableError`.

    implementation : {'numpy', 'python'}
        'numpy' derives all cones from the vectorised `dominance_matrices`.
        'python' compares the objects pair by pair, possibly spread over
        `n_jobs` processes. Both yield identical histograms.

    n_jobs : int or None
        Number of jobs for the 'python' implementation, see
        :class:`joblib.Parallel`. Ignored by 'numpy'.

    Attributes
    -----
    n_objects : int
        Number of objects of the table the histograms were built from.

    families : frozenset of ConeFamily
        The families whose histograms were computed.
    """

    def __init__(self, table: InformationTable, only_necessary: bool = False,
                 implementation: str = 'numpy', n_jobs: Optional[int] = None):
        if table is None:
            raise ValueError("Information table must not be None.")
        if implementation not in ('numpy', 'python'):
            raise ValueError("Unknown implementation %r, expected 'numpy' or "
                             "'python'" % (implementation,))
        keys = self._keys(table)
        self.n_objects: int = table.n_objects
        self.only_necessary = only_necessary
        self.families: FrozenSet[ConeFamily] = \
            NECESSARY_FAMILIES if only_necessary else frozenset(ConeFamily)
        self._distributions: Dict[ConeFamily, List[DecisionDistribution]] = {}

        families = [f for f in _FAMILY_ORDER if f in self.families]
        if implementation == 'numpy':
            if n_jobs is not None:
                warnings.warn("n_jobs=%r is ignored by the numpy "
                              "implementation." % (n_jobs,))
            dominance, inverse_dominance = dominance_matrices(table)
            for family in families:
                self._distributions[family] = [
                    DecisionDistribution(
                        keys[y] for y in np.flatnonzero(family.members(
                            x, dominance, inverse_dominance)).tolist())
                    for x in range(self.n_objects)]
        else:
            parallel = Parallel(n_jobs=n_jobs)
            for family in families:
                self._distributions[family] = parallel(
                    delayed(_python_cone_distribution)(x, table, family, keys)
                    for x in range(self.n_objects))

    @abstractmethod
    def _keys(self, table: InformationTable) -> Sequence[Hashable]:
        """:return: The key each object is counted under.
        :raise ValueError: if `table` does not provide them.
        """
        raise NotImplementedError

    def get_distribution(self, family: ConeFamily,
                         x: int) -> DecisionDistribution:
        """:return: The histogram of the cone of `family` with origin `x`.
        :raise DistributionNotAvailableError: if `family` was not computed.
        :raise IndexError: if `x` is out of range.
        """
        family = ConeFamily(family)
        if family not in self._distributions:
            raise DistributionNotAvailableError(
                "Distributions of %s cones were not computed, because only "
                "the necessary ones were requested." % family.value)
        return self._distributions[family][
            check_object_index(x, self.n_objects)]

    def is_available(self, family: ConeFamily) -> bool:
        return ConeFamily(family) in self._distributions


class DominanceConesDecisionDistributions(_BaseDominanceConesDistributions):
    """Histograms of decisions within the dominance cones of all objects.

    See `_BaseDominanceConesDistributions` for the parameters.
    """

    def _keys(self, table: InformationTable) -> Sequence[Hashable]:
        if table.n_objects and not table.has_decisions:
            raise ValueError("Information table has no active decision "
                             "attribute, cannot count decisions.")
        return table.decisions or ()

    def get_positive_d_cone_decision_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.POSITIVE_D, x)

    def get_negative_d_cone_decision_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.NEGATIVE_D, x)

    def get_positive_inv_d_cone_decision_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.POSITIVE_INV_D, x)

    def get_negative_inv_d_cone_decision_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.NEGATIVE_INV_D, x)


class DominanceConesDecisionClassDistributions(
        _BaseDominanceConesDistributions):
    """Histograms of decision classes within the dominance cones of all
    objects, for tables labelled with `InformationTable.with_decision_classes`.

    See `_BaseDominanceConesDistributions` for the parameters.
    """

    def _keys(self, table: InformationTable) -> Sequence[Hashable]:
        if table.n_objects and table.decision_classes is None:
            raise ValueError("Information table has no decision classes.")
        if table.decision_classes is not None \
                and any(c is None for c in table.decision_classes):
            raise ValueError("Decision classes must not contain None.")
        return table.decision_classes or ()

    def get_positive_d_cone_decision_class_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.POSITIVE_D, x)

    def get_negative_d_cone_decision_class_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.NEGATIVE_D, x)

    def get_positive_inv_d_cone_decision_class_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.POSITIVE_INV_D, x)

    def get_negative_inv_d_cone_decision_class_distribution(
            self, x: int) -> DecisionDistribution:
        return self.get_distribution(ConeFamily.NEGATIVE_INV_D, x)
