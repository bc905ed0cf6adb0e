"""
Dominance-based rough set analysis:
The dominance relation between objects of an information table, and the four
dominance cones derived from it.

Object `x` dominates object `y` iff `x` is at least as good as `y` on every
active condition attribute; `x` is dominated by `y` iff `x` is at most as good
as `y` on every active condition attribute. Comparisons which are FALSE or
UNCOMPARABLE both break the relation.

The cones of an origin object `x` are

- positive D cone: all `y` dominating `x`
- negative D cone: all `y` dominated by `x`
- positive inverse D cone: all `y` for which `x` is dominated by `y`
- negative inverse D cone: all `y` for which `y` is dominated by `x`

Without asymmetric (MV1.5) missing values the positive D and positive inverse
D cones of each object coincide, and so do the negative ones.
"""

from enum import Enum
from typing import Dict, List, Set, Tuple

import numpy as np

from sklearn_drsa.data import InformationTable
from sklearn_drsa.evaluation import (
    Evaluation, KnownEvaluation, MissingValueMV15, PreferenceType, Relation,
    TernaryLogicValue, compare)
from sklearn_drsa.util import check_object_index


def _check_table(table: InformationTable) -> None:
    if table is None:
        raise ValueError("Information table must not be None.")


def _holds_on_all(x: int, y: int, table: InformationTable,
                  relation: Relation) -> bool:
    _check_table(table)
    x_evaluations = table.get_active_condition_evaluations(x)
    y_evaluations = table.get_active_condition_evaluations(y)
    return all(compare(x_evaluation, y_evaluation, relation)
               is TernaryLogicValue.TRUE
               for x_evaluation, y_evaluation
               in zip(x_evaluations, y_evaluations))


def dominates(x: int, y: int, table: InformationTable) -> bool:
    """:return: True iff object `x` is at least as good as object `y` on all
        active condition attributes of `table`.
    :raise ValueError: if `table` is None.
    :raise IndexError: if `x` or `y` is out of range.
    """
    return _holds_on_all(x, y, table, Relation.AT_LEAST)


def is_dominated_by(x: int, y: int, table: InformationTable) -> bool:
    """:return: True iff object `x` is at most as good as object `y` on all
        active condition attributes of `table`.
    :raise ValueError: if `table` is None.
    :raise IndexError: if `x` or `y` is out of range.
    """
    return _holds_on_all(x, y, table, Relation.AT_MOST)


class ConeFamily(Enum):
    """The four kinds of dominance cones."""
    POSITIVE_D = 'positive_d'
    NEGATIVE_D = 'negative_d'
    POSITIVE_INV_D = 'positive_inv_d'
    NEGATIVE_INV_D = 'negative_inv_d'

    def contains(self, x: int, y: int, table: InformationTable) -> bool:
        """:return: True iff `y` is in this cone of origin `x`."""
        if self is ConeFamily.POSITIVE_D:
            return dominates(y, x, table)
        if self is ConeFamily.NEGATIVE_D:
            return dominates(x, y, table)
        if self is ConeFamily.POSITIVE_INV_D:
            return is_dominated_by(x, y, table)
        return is_dominated_by(y, x, table)

    def members(self, x: int, dominance: np.ndarray,
                inverse_dominance: np.ndarray) -> np.ndarray:
        """:return: The boolean membership vector of this cone of origin `x`,
            taken from the matrices computed by `dominance_matrices`.
        """
        if self is ConeFamily.POSITIVE_D:
            return dominance[:, x]
        if self is ConeFamily.NEGATIVE_D:
            return dominance[x, :]
        if self is ConeFamily.POSITIVE_INV_D:
            return inverse_dominance[x, :]
        return inverse_dominance[:, x]


class DominanceConeCalculator:
    """Computes the dominance cones of single objects, by pairwise comparison
    of the origin with every object of the table.
    """

    @staticmethod
    def cone(x: int, table: InformationTable,
             family: ConeFamily) -> Set[int]:
        """:return: The indices of all objects in the cone of `family` with
            origin `x`. The origin itself is always part of it.
        :raise ValueError: if `table` is None.
        :raise IndexError: if `x` is out of range.
        """
        _check_table(table)
        x = check_object_index(x, table.n_objects)
        family = ConeFamily(family)
        return {y for y in range(table.n_objects)
                if family.contains(x, y, table)}

    @classmethod
    def positive_d_cone(cls, x: int, table: InformationTable) -> Set[int]:
        return cls.cone(x, table, ConeFamily.POSITIVE_D)

    @classmethod
    def negative_d_cone(cls, x: int, table: InformationTable) -> Set[int]:
        return cls.cone(x, table, ConeFamily.NEGATIVE_D)

    @classmethod
    def positive_inv_d_cone(cls, x: int, table: InformationTable) -> Set[int]:
        return cls.cone(x, table, ConeFamily.POSITIVE_INV_D)

    @classmethod
    def negative_inv_d_cone(cls, x: int, table: InformationTable) -> Set[int]:
        return cls.cone(x, table, ConeFamily.NEGATIVE_INV_D)

    @staticmethod
    def _has_asymmetric_missing_values(table: InformationTable) -> bool:
        _check_table(table)
        return any(isinstance(evaluation, MissingValueMV15)
                   for x in range(table.n_objects)
                   for evaluation in table.get_active_condition_evaluations(x))

    @classmethod
    def positive_dominance_cones_equal(cls, table: InformationTable) -> bool:
        """:return: True if the positive D cone and the positive inverse D cone
            of each object of `table` are guaranteed to be equal, which is the
            case unless an MV1.5 missing value occurs on an active condition
            attribute.
        """
        return not cls._has_asymmetric_missing_values(table)

    @classmethod
    def negative_dominance_cones_equal(cls, table: InformationTable) -> bool:
        """Like `positive_dominance_cones_equal`, for the negative cones."""
        return not cls._has_asymmetric_missing_values(table)


def _pairwise_relation(column: List[Evaluation],
                       relation: Relation) -> np.ndarray:
    n = len(column)
    return np.array([compare(a, b, relation) is TernaryLogicValue.TRUE
                     for a in column for b in column],
                    dtype=bool).reshape(n, n)


def _column_relations(column: List[Evaluation]
                      ) -> Tuple[np.ndarray, np.ndarray]:
    """:return: `(at_least, at_most)`, boolean matrices where `at_least[a, b]`
        holds iff `column[a].is_at_least_as_good_as(column[b])` is TRUE.

    Columns whose known evaluations are all mutually comparable are
    vectorised, all others are compared pair by pair.
    """
    known = [e for e in column if not e.is_missing]
    if known and not all(isinstance(e, KnownEvaluation)
                         and known[0].comparable_with(e) for e in known):
        return (_pairwise_relation(column, Relation.AT_LEAST),
                _pairwise_relation(column, Relation.AT_MOST))

    n = len(column)
    missing = np.array([e.is_missing for e in column], dtype=bool)
    if known:
        values = np.array([0 if e.is_missing else e.value for e in column])
        left = values[:, np.newaxis]
        right = values[np.newaxis, :]
        preference = known[0].preference_type
        if preference is PreferenceType.GAIN:
            at_least, at_most = left >= right, left <= right
        elif preference is PreferenceType.COST:
            at_least, at_most = left <= right, left >= right
        else:
            at_least = at_most = left == right
    else:
        at_least = at_most = np.zeros((n, n), dtype=bool)

    when_left = np.array([e.is_missing and e.when_left is TernaryLogicValue.TRUE
                          for e in column], dtype=bool)
    when_right = np.array([e.is_missing
                           and e.when_right is TernaryLogicValue.TRUE
                           for e in column], dtype=bool)

    def resolve_missing(known_relation: np.ndarray) -> np.ndarray:
        return np.where(missing[:, np.newaxis], when_left[:, np.newaxis],
                        np.where(missing[np.newaxis, :],
                                 when_right[np.newaxis, :], known_relation))

    return resolve_missing(at_least), resolve_missing(at_most)


def dominance_matrices(table: InformationTable
                       ) -> Tuple[np.ndarray, np.ndarray]:
    """Compute the whole dominance relation of `table` at once.

    :return: `(dominance, inverse_dominance)`, boolean arrays of shape
        (n_objects, n_objects) with `dominance[x, y] == dominates(x, y, table)`
        and `inverse_dominance[x, y] == is_dominated_by(x, y, table)`.
    :raise ValueError: if `table` is None.
    """
    _check_table(table)
    n = table.n_objects
    dominance = np.ones((n, n), dtype=bool)
    inverse_dominance = np.ones((n, n), dtype=bool)
    evaluations = [table.get_active_condition_evaluations(x)
                   for x in range(n)]
    for j in range(len(table.active_condition_attribute_indices)):
        at_least, at_most = _column_relations([row[j] for row in evaluations])
        dominance &= at_least
        inverse_dominance &= at_most
    return dominance, inverse_dominance


class DominanceCones:
    """The dominance cones of all objects of an information table.

    Parameters
    -----
    table : InformationTable

    implementation : {'numpy', 'python'}
        'numpy' derives all cones from `dominance_matrices`, 'python' calls
        `DominanceConeCalculator` for each object. Both give identical cones.
    """

    def __init__(self, table: InformationTable, implementation: str = 'numpy'):
        _check_table(table)
        self.n_objects = table.n_objects
        self._cones: Dict[ConeFamily, List[Set[int]]]
        if implementation == 'numpy':
            dominance, inverse_dominance = dominance_matrices(table)
            self._cones = {
                family: [set(np.flatnonzero(family.members(
                    x, dominance, inverse_dominance)).tolist())
                    for x in range(self.n_objects)]
                for family in ConeFamily}
        elif implementation == 'python':
            self._cones = {
                family: [DominanceConeCalculator.cone(x, table, family)
                         for x in range(self.n_objects)]
                for family in ConeFamily}
        else:
            raise ValueError("Unknown implementation %r, expected 'numpy' or "
                             "'python'" % (implementation,))

    def get_cone(self, family: ConeFamily, x: int) -> Set[int]:
        return self._cones[ConeFamily(family)][
            check_object_index(x, self.n_objects)]

    def get_positive_d_cone(self, x: int) -> Set[int]:
        return self.get_cone(ConeFamily.POSITIVE_D, x)

    def get_negative_d_cone(self, x: int) -> Set[int]:
        return self.get_cone(ConeFamily.NEGATIVE_D, x)

    def get_positive_inv_d_cone(self, x: int) -> Set[int]:
        return self.get_cone(ConeFamily.POSITIVE_INV_D, x)

    def get_negative_inv_d_cone(self, x: int) -> Set[int]:
        return self.get_cone(ConeFamily.NEGATIVE_INV_D, x)

    def cone_sizes(self, family: ConeFamily) -> np.ndarray:
        """:return: The size of the cone of `family` of each object."""
        return np.array([len(cone) for cone in self._cones[ConeFamily(family)]],
                        dtype=int)

    def positive_dominance_cones_equal(self) -> bool:
        """:return: True iff each positive D cone equals the positive inverse
            D cone of the same origin.
        """
        return self._cones[ConeFamily.POSITIVE_D] \
            == self._cones[ConeFamily.POSITIVE_INV_D]

    def negative_dominance_cones_equal(self) -> bool:
        """:return: True iff each negative D cone equals the negative inverse
            D cone of the same origin.
        """
        return self._cones[ConeFamily.NEGATIVE_D] \
            == self._cones[ConeFamily.NEGATIVE_INV_D]
