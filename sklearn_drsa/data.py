"""
Dominance-based rough set analysis:
Attributes, decisions and the information table holding the analysed objects.
"""

import math
import warnings
from abc import ABC, abstractmethod
from collections import Counter
from enum import Enum
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from sklearn.utils.validation import check_consistent_length, column_or_1d

from sklearn_drsa.evaluation import (
    ElementList, EnumerationEvaluation, Evaluation, IntegerEvaluation,
    MissingValueType, PreferenceType, RealEvaluation, TernaryLogicValue)
from sklearn_drsa.util import build_preference_types, check_object_index, \
    encode_decisions


class AttributeType(Enum):
    CONDITION = 'condition'
    DECISION = 'decision'
    IDENTIFICATION = 'identification'
    DESCRIPTION = 'description'


class Attribute:
    """A column of an `InformationTable`.

    Only active condition attributes take part in dominance, only active
    decision attributes make up the decision of an object.
    """

    def __init__(self, name: str,
                 type: AttributeType = AttributeType.CONDITION,
                 preference_type: PreferenceType = PreferenceType.NONE,
                 active: bool = True,
                 missing_value_type: MissingValueType = MissingValueType.MV2):
        self.name = name
        self.type = AttributeType(type)
        self.preference_type = PreferenceType(preference_type)
        self.active = active
        self.missing_value_type = MissingValueType(missing_value_type)

    @property
    def is_active_condition(self) -> bool:
        return self.active and self.type is AttributeType.CONDITION

    @property
    def is_active_decision(self) -> bool:
        return self.active and self.type is AttributeType.DECISION

    @property
    def is_active_identification(self) -> bool:
        return self.active and self.type is AttributeType.IDENTIFICATION

    def __repr__(self):
        return 'Attribute({!r}, {}, {}{})'.format(
            self.name, self.type.name, self.preference_type.name,
            '' if self.active else ', inactive')


class Decision(ABC):
    """The evaluations of an object on all active decision attributes.

    Decisions are hashable, equal decisions count as the same key in a
    `DecisionDistribution`. They are compared attribute by attribute; a
    comparison is TRUE iff it is TRUE on every decision attribute.
    """

    @property
    @abstractmethod
    def evaluations(self) -> Dict[int, Evaluation]:
        """Mapping from attribute index to evaluation."""
        raise NotImplementedError

    @property
    def attribute_indices(self) -> Tuple[int, ...]:
        return tuple(self.evaluations)

    @property
    def has_no_missing_evaluation(self) -> bool:
        return not any(e.is_missing for e in self.evaluations.values())

    @property
    def has_all_missing_evaluations(self) -> bool:
        return all(e.is_missing for e in self.evaluations.values())

    def _compare(self, other, method: str) -> TernaryLogicValue:
        if not isinstance(other, Decision) \
                or other.attribute_indices != self.attribute_indices:
            return TernaryLogicValue.UNCOMPARABLE
        other_evaluations = other.evaluations
        return TernaryLogicValue.of(all(
            getattr(evaluation, method)(other_evaluations[index])
            is TernaryLogicValue.TRUE
            for index, evaluation in self.evaluations.items()))

    def is_at_least_as_good_as(self, other) -> TernaryLogicValue:
        return self._compare(other, 'is_at_least_as_good_as')

    def is_at_most_as_good_as(self, other) -> TernaryLogicValue:
        return self._compare(other, 'is_at_most_as_good_as')

    def is_equal_to(self, other) -> TernaryLogicValue:
        return self._compare(other, 'is_equal_to')

    def __eq__(self, other):
        if not isinstance(other, Decision):
            return NotImplemented
        return self.evaluations == other.evaluations

    def __hash__(self):
        return hash(tuple(self.evaluations.items()))


class SimpleDecision(Decision):
    """Decision made of a single evaluation, the usual case."""

    def __init__(self, evaluation: Evaluation, attribute_index: int):
        self.evaluation = evaluation
        self.attribute_index = attribute_index

    @property
    def evaluations(self) -> Dict[int, Evaluation]:
        return {self.attribute_index: self.evaluation}

    def __str__(self):
        return str(self.evaluation)

    def __repr__(self):
        return 'SimpleDecision({!r}, {})'.format(self.evaluation,
                                                 self.attribute_index)


class CompositeDecision(Decision):
    """Decision made of the evaluations on several decision attributes."""

    def __init__(self, evaluations: Dict[int, Evaluation]):
        if len(evaluations) < 2:
            raise ValueError("A composite decision needs at least two "
                             "evaluations, got %d" % len(evaluations))
        self._evaluations = dict(sorted(evaluations.items()))

    @property
    def evaluations(self) -> Dict[int, Evaluation]:
        return dict(self._evaluations)

    def __str__(self):
        return '(' + ', '.join(map(str, self._evaluations.values())) + ')'

    def __repr__(self):
        return 'CompositeDecision({!r})'.format(self._evaluations)


def make_decision(evaluations: Sequence[Evaluation],
                  attribute_indices: Sequence[int]) -> Decision:
    """:return: A `SimpleDecision` for a single evaluation, a
        `CompositeDecision` for more.
    """
    if len(evaluations) != len(attribute_indices) or not evaluations:
        raise ValueError("Need the same, positive number of evaluations and "
                         "attribute indices, got %d and %d"
                         % (len(evaluations), len(attribute_indices)))
    if len(evaluations) == 1:
        return SimpleDecision(evaluations[0], attribute_indices[0])
    return CompositeDecision(dict(zip(attribute_indices, evaluations)))


class DecisionDistribution:
    """Histogram counting how often each key occurs, usually decisions of
    objects, or decision classes.

    Keys are opaque, only their equality and hash matter. Only keys with a
    positive count are present.
    """

    def __init__(self, keys: Iterable[Hashable] = ()):
        self._counts = Counter()
        for key in keys:
            self.increase_count(key)

    def increase_count(self, key: Hashable) -> None:
        if key is None:
            raise ValueError("Cannot count None in a decision distribution.")
        self._counts[key] += 1

    def get_count(self, key: Hashable) -> int:
        """:return: How often `key` was counted, 0 if never."""
        return self._counts.get(key, 0)

    def is_present(self, key: Hashable) -> bool:
        return key in self._counts

    @property
    def decisions(self):
        """All keys with a positive count."""
        return self._counts.keys()

    @property
    def n_different_decisions(self) -> int:
        return len(self._counts)

    @property
    def total(self) -> int:
        """Sum of all counts."""
        return sum(self._counts.values())

    def mode(self) -> Optional[List[Hashable]]:
        """:return: All most frequent keys, in the order they were first
            counted. None if nothing was counted.
        """
        if not self._counts:
            return None
        highest = max(self._counts.values())
        return [key for key, count in self._counts.items() if count == highest]

    def median(self, ordered_decisions: Sequence[Hashable]
               ) -> Optional[Hashable]:
        """:return: The median key, given all keys of this distribution in
            ascending order. None if nothing was counted.
        :raise ValueError: if `ordered_decisions` does not have one entry per
            key of this distribution.
        """
        if len(ordered_decisions) != self.n_different_decisions:
            raise ValueError("Expected %d ordered decisions, got %d"
                             % (self.n_different_decisions,
                                len(ordered_decisions)))
        half = math.floor(self.total / 2 + 0.5)
        cumulative = 0
        for decision in ordered_decisions:
            cumulative += self.get_count(decision)
            if cumulative >= half:
                return decision
        return None

    def as_dict(self) -> Dict[Hashable, int]:
        return dict(self._counts)

    def __len__(self):
        return len(self._counts)

    def __eq__(self, other):
        if not isinstance(other, DecisionDistribution):
            return NotImplemented
        return self._counts == other._counts

    __hash__ = None

    def __repr__(self):
        return 'DecisionDistribution({})'.format(
            ', '.join('{}: {}'.format(key, count)
                      for key, count in self._counts.items()))


class InformationTable:
    """The analysed objects: one row of evaluations per object, one column per
    attribute.

    The table is validated on construction and not changed afterwards. It
    precomputes the evaluations on active condition attributes, which are the
    only ones dominance looks at, and the decision of each object.

    Attributes
    -----
    attributes : tuple of Attribute

    rows : tuple of tuple of Evaluation
        The evaluations of all objects, indexed by object and attribute.

    active_condition_attribute_indices : tuple of int
        Indices into `attributes` of all active condition attributes.

    decision_classes : tuple or None
        Optional label of each object, used by
        `DominanceConesDecisionClassDistributions`.
    """

    def __init__(self, attributes: Sequence[Attribute],
                 rows: Iterable[Sequence[Evaluation]],
                 decision_classes: Optional[Sequence[Hashable]] = None):
        if attributes is None:
            raise ValueError("Attributes of an information table must not be "
                             "None.")
        if rows is None:
            raise ValueError("Rows of an information table must not be None.")
        self.attributes: Tuple[Attribute, ...] = tuple(attributes)
        self.rows: Tuple[Tuple[Evaluation, ...], ...] = \
            tuple(tuple(row) for row in rows)
        n_attributes = len(self.attributes)
        for object_index, row in enumerate(self.rows):
            if len(row) != n_attributes:
                raise ValueError("Row %d has %d evaluations, expected %d"
                                 % (object_index, len(row), n_attributes))
        if sum(a.is_active_identification for a in self.attributes) > 1:
            raise ValueError("An information table may have at most one "
                             "active identification attribute.")

        self.active_condition_attribute_indices: Tuple[int, ...] = tuple(
            j for j, a in enumerate(self.attributes) if a.is_active_condition)
        decision_indices = tuple(
            j for j, a in enumerate(self.attributes) if a.is_active_decision)
        for j in self.active_condition_attribute_indices + decision_indices:
            for object_index, row in enumerate(self.rows):
                if not isinstance(row[j], Evaluation):
                    raise ValueError(
                        "Evaluation of object %d on attribute %r is no "
                        "Evaluation: %r"
                        % (object_index, self.attributes[j].name, row[j]))

        self._active_condition_evaluations = tuple(
            tuple(row[j] for j in self.active_condition_attribute_indices)
            for row in self.rows)
        self._decisions: Optional[Tuple[Decision, ...]] = None
        if decision_indices:
            self._decisions = tuple(
                make_decision([row[j] for j in decision_indices],
                              decision_indices)
                for row in self.rows)

        self.decision_classes: Optional[Tuple[Hashable, ...]] = None
        if decision_classes is not None:
            self.decision_classes = tuple(decision_classes)
            if len(self.decision_classes) != len(self.rows):
                raise ValueError("Got %d decision classes for %d objects"
                                 % (len(self.decision_classes),
                                    len(self.rows)))

        if not self.active_condition_attribute_indices:
            warnings.warn("Information table has no active condition "
                          "attributes, every object dominates every other.")

    @classmethod
    def from_array(cls, X, y=None, preference_types=None,
                   missing_value_type=MissingValueType.MV2,
                   decision_order=None,
                   decision_preference_type=PreferenceType.GAIN,
                   feature_names: Optional[Sequence[str]] = None
                   ) -> 'InformationTable':
        """Build an information table from a numeric feature matrix.

        :param X: array-like of shape (n_objects, n_features). Integer columns
            become `IntegerEvaluation`s, floating point columns become
            `RealEvaluation`s, NaN becomes the missing value of
            `missing_value_type`.
        :param y: Optional class labels, becoming an enumerated decision
            attribute appended after the condition attributes.
        :param preference_types: Preference type of the features, see
            `build_preference_types`.
        :param decision_order: The classes of `y` ordered from worst to best.
            Lexicographic order is used if None.
        """
        X = np.asarray(X)
        if X.ndim != 2:
            raise ValueError("Expected 2D array for X, got shape %s"
                             % (X.shape,))
        if X.dtype == bool:
            X = X.astype(int)
        if not np.issubdtype(X.dtype, np.number):
            raise ValueError("Expected numeric X, got dtype %s" % X.dtype)
        n_objects, n_features = X.shape
        preferences = build_preference_types(preference_types, n_features)
        if preferences is None:
            raise ValueError("Unrecognized preference_types: %r"
                             % (preference_types,))
        missing_value_type = MissingValueType(missing_value_type)
        if feature_names is None:
            feature_names = ['x%d' % j for j in range(n_features)]
        elif len(feature_names) != n_features:
            raise ValueError("Got %d feature names for %d features"
                             % (len(feature_names), n_features))

        attributes = [Attribute(name, AttributeType.CONDITION, preference,
                                missing_value_type=missing_value_type)
                      for name, preference in zip(feature_names, preferences)]
        missing = missing_value_type.missing_value
        if np.issubdtype(X.dtype, np.integer):
            rows = [[IntegerEvaluation(value, preference)
                     for value, preference in zip(row, preferences)]
                    for row in X.tolist()]
        else:
            rows = [[missing if math.isnan(value)
                     else RealEvaluation(value, preference)
                     for value, preference in zip(row, preferences)]
                    for row in X.tolist()]

        if y is not None:
            y = column_or_1d(y)
            check_consistent_length(X, y)
            classes, codes = encode_decisions(y, decision_order)
            element_list = ElementList(str(c) for c in classes.tolist())
            attributes.append(Attribute('decision', AttributeType.DECISION,
                                        decision_preference_type))
            for row, code in zip(rows, codes.tolist()):
                row.append(EnumerationEvaluation(element_list, code,
                                                 decision_preference_type))
        return cls(attributes, rows)

    @property
    def n_objects(self) -> int:
        return len(self.rows)

    @property
    def n_attributes(self) -> int:
        return len(self.attributes)

    @property
    def active_condition_attributes(self) -> Tuple[Attribute, ...]:
        return tuple(self.attributes[j]
                     for j in self.active_condition_attribute_indices)

    def get_evaluation(self, object_index: int,
                       attribute_index: int) -> Evaluation:
        object_index = check_object_index(object_index, self.n_objects)
        if isinstance(attribute_index, (bool, np.bool_)) \
                or not isinstance(attribute_index, (int, np.integer)) \
                or not 0 <= attribute_index < self.n_attributes:
            raise IndexError("Attribute index %r out of range for %d "
                             "attributes" % (attribute_index, self.n_attributes))
        return self.rows[object_index][attribute_index]

    def get_active_condition_evaluations(self, object_index: int
                                         ) -> Tuple[Evaluation, ...]:
        """:return: The evaluations of the object at `object_index` on all
            active condition attributes, in attribute order.
        """
        return self._active_condition_evaluations[
            check_object_index(object_index, self.n_objects)]

    @property
    def has_decisions(self) -> bool:
        return self._decisions is not None

    @property
    def decisions(self) -> Optional[Tuple[Decision, ...]]:
        """The decision of each object, None if there are no active decision
        attributes.
        """
        return self._decisions

    def get_decision(self, object_index: int) -> Optional[Decision]:
        object_index = check_object_index(object_index, self.n_objects)
        if self._decisions is None:
            return None
        return self._decisions[object_index]

    def get_decision_class(self, object_index: int) -> Optional[Hashable]:
        object_index = check_object_index(object_index, self.n_objects)
        if self.decision_classes is None:
            return None
        return self.decision_classes[object_index]

    def with_decision_classes(self, decision_classes: Sequence[Hashable]
                              ) -> 'InformationTable':
        """:return: A copy of this table labelling its objects with
            `decision_classes`.
        """
        return InformationTable(self.attributes, self.rows, decision_classes)

    def ordered_unique_fully_determined_decisions(self) -> List[Decision]:
        """:return: The distinct decisions without missing evaluations, in
            ascending order. Suitable for `DecisionDistribution.median`.
        """
        ordered: List[Decision] = []
        for decision in self._decisions or ():
            if not decision.has_no_missing_evaluation or decision in ordered:
                continue
            for position, known in enumerate(ordered):
                if decision.is_at_most_as_good_as(known) \
                        is TernaryLogicValue.TRUE:
                    ordered.insert(position, decision)
                    break
            else:
                ordered.append(decision)
        return ordered

    def __repr__(self):
        return '<InformationTable: %d objects, %d attributes>' \
               % (self.n_objects, self.n_attributes)
