"""
Dominance-based rough set analysis:
Evaluations of objects on attributes, compared using three-valued logic.

Every comparison of two evaluations yields a `TernaryLogicValue`. Comparisons
that cannot be decided (different kinds of values, different preference types,
operands that are no evaluations at all) yield `UNCOMPARABLE`, they never
raise.
"""

import operator
from abc import ABC
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Tuple


class TernaryLogicValue(Enum):
    """Result of all comparisons between evaluations."""
    TRUE = 'true'
    FALSE = 'false'
    UNCOMPARABLE = 'uncomparable'

    @classmethod
    def of(cls, value: bool) -> 'TernaryLogicValue':
        """:return: `TRUE` if `value` else `FALSE`."""
        return cls.TRUE if value else cls.FALSE

    def negate(self) -> 'TernaryLogicValue':
        """:return: Swapped `TRUE` and `FALSE`, `UNCOMPARABLE` stays."""
        if self is TernaryLogicValue.TRUE:
            return TernaryLogicValue.FALSE
        if self is TernaryLogicValue.FALSE:
            return TernaryLogicValue.TRUE
        return self


class PreferenceType(Enum):
    """Preference semantics of an attribute, and of its evaluations.

    - GAIN: higher values are better.
    - COST: lower values are better.
    - NONE: values are nominal, "at least as good as" degenerates to equality.
    """
    GAIN = 'gain'
    COST = 'cost'
    NONE = 'none'


class Relation(Enum):
    """The relations which can be tested with `compare`."""
    AT_LEAST = 'at_least'
    AT_MOST = 'at_most'
    EQUAL = 'equal'
    DIFFERENT = 'different'


# (preference type, relation) => test on the raw values of known evaluations
_KNOWN_VALUE_TESTS: Dict[Tuple[PreferenceType, Relation],
                         Callable[[Any, Any], bool]] = {
    (PreferenceType.GAIN, Relation.AT_LEAST): operator.ge,
    (PreferenceType.GAIN, Relation.AT_MOST): operator.le,
    (PreferenceType.GAIN, Relation.EQUAL): operator.eq,
    (PreferenceType.COST, Relation.AT_LEAST): operator.le,
    (PreferenceType.COST, Relation.AT_MOST): operator.ge,
    (PreferenceType.COST, Relation.EQUAL): operator.eq,
    (PreferenceType.NONE, Relation.AT_LEAST): operator.eq,
    (PreferenceType.NONE, Relation.AT_MOST): operator.eq,
    (PreferenceType.NONE, Relation.EQUAL): operator.eq,
}


def compare(evaluation, other, relation: Relation) -> TernaryLogicValue:
    """Test whether `evaluation` is in `relation` with `other`.

    This is the single comparison function behind all `Evaluation` methods.
    It matches on the pair of operands:

    - any operand which is not an `Evaluation`: `UNCOMPARABLE`
    - `evaluation` is missing: the missing value decides (`when_left`)
    - `other` is missing: the missing value decides (`when_right`)
    - two known evaluations of the same kind, preference type (and element
      list, for enumerations): the raw values are compared according to the
      preference type
    - any other pair: `UNCOMPARABLE`

    `Relation.DIFFERENT` is the ternary negation of `Relation.EQUAL`.
    """
    if not isinstance(evaluation, Evaluation) \
            or not isinstance(other, Evaluation):
        return TernaryLogicValue.UNCOMPARABLE
    if relation is Relation.DIFFERENT:
        return compare(evaluation, other, Relation.EQUAL).negate()
    if evaluation.is_missing:
        return evaluation.when_left
    if other.is_missing:
        return other.when_right
    if not isinstance(evaluation, KnownEvaluation) \
            or not isinstance(other, KnownEvaluation) \
            or not evaluation.comparable_with(other):
        return TernaryLogicValue.UNCOMPARABLE
    test = _KNOWN_VALUE_TESTS[(evaluation.preference_type, relation)]
    return TernaryLogicValue.of(test(evaluation.value, other.value))


class Evaluation(ABC):
    """Value of a single object on a single attribute.

    Subclasses form a closed set: the known evaluations `IntegerEvaluation`,
    `RealEvaluation` and `EnumerationEvaluation`, and the missing values
    `MissingValueMV15` and `MissingValueMV2`. All comparison methods delegate
    to `compare`.
    """

    __slots__ = ()

    is_missing = False

    def is_at_least_as_good_as(self, other) -> TernaryLogicValue:
        return compare(self, other, Relation.AT_LEAST)

    def is_at_most_as_good_as(self, other) -> TernaryLogicValue:
        return compare(self, other, Relation.AT_MOST)

    def is_equal_to(self, other) -> TernaryLogicValue:
        return compare(self, other, Relation.EQUAL)

    def is_different_than(self, other) -> TernaryLogicValue:
        return compare(self, other, Relation.DIFFERENT)


class KnownEvaluation(Evaluation):
    """An evaluation holding an actual `value`, tagged with the preference type
    of its attribute.

    Attributes
    -----
    value : int or float
        The raw value, compared according to `preference_type`. For
        enumerations this is the index of the element.

    preference_type : PreferenceType
    """

    __slots__ = ('_value', '_preference_type')

    def __init__(self, value, preference_type: PreferenceType):
        self._value = value
        self._preference_type = PreferenceType(preference_type)

    @property
    def value(self):
        return self._value

    @property
    def preference_type(self) -> PreferenceType:
        return self._preference_type

    def comparable_with(self, other: 'KnownEvaluation') -> bool:
        """:return: True iff the raw values of `self` and `other` may be
            compared, i.e. both are of the same kind and preference type.
        """
        return type(self) is type(other) \
            and self._preference_type is other._preference_type

    def _identity(self) -> tuple:
        return type(self), self._preference_type, self._value

    def __eq__(self, other):
        if not isinstance(other, KnownEvaluation):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self):
        return hash(self._identity())

    def __str__(self):
        return str(self._value)

    def __repr__(self):
        return '{}({!r}, {})'.format(type(self).__name__, self._value,
                                     self._preference_type.name)


class IntegerEvaluation(KnownEvaluation):
    __slots__ = ()

    def __init__(self, value: int,
                 preference_type: PreferenceType = PreferenceType.NONE):
        super().__init__(int(value), preference_type)


class RealEvaluation(KnownEvaluation):
    __slots__ = ()

    def __init__(self, value: float,
                 preference_type: PreferenceType = PreferenceType.NONE):
        super().__init__(float(value), preference_type)


class ElementList:
    """The ordered, named elements of an enumerated attribute.

    The order of `elements` defines the order of `EnumerationEvaluation`s of
    gain and cost attributes.
    """

    __slots__ = ('elements', '_index_by_element')

    def __init__(self, elements: Iterable[str]):
        if elements is None:
            raise ValueError("Elements of an element list must not be None.")
        self.elements: Tuple[str, ...] = tuple(elements)
        self._index_by_element = {element: index
                                  for index, element in enumerate(self.elements)}
        if len(self._index_by_element) != len(self.elements):
            raise ValueError("Elements of an element list must be distinct, "
                             "got {!r}".format(self.elements))

    def index(self, element: str) -> int:
        """:return: The index of `element`.
        :raise ValueError: if `element` is not part of this list.
        """
        try:
            return self._index_by_element[element]
        except KeyError:
            raise ValueError("{!r} is not an element of {!r}"
                             .format(element, self)) from None

    def element(self, index: int) -> str:
        return self.elements[index]

    def __len__(self):
        return len(self.elements)

    def __eq__(self, other):
        if not isinstance(other, ElementList):
            return NotImplemented
        return self.elements == other.elements

    def __hash__(self):
        return hash(self.elements)

    def __repr__(self):
        return 'ElementList({!r})'.format(self.elements)


class EnumerationEvaluation(KnownEvaluation):
    """An evaluation on an enumerated attribute: one of the elements of
    `element_list`, represented by its index.

    Enumeration evaluations are only comparable if their element lists are
    equal.
    """

    __slots__ = ('_element_list',)

    def __init__(self, element_list: ElementList, index: int,
                 preference_type: PreferenceType = PreferenceType.NONE):
        if not 0 <= index < len(element_list):
            raise ValueError("Index {} out of range for {!r}"
                             .format(index, element_list))
        super().__init__(int(index), preference_type)
        self._element_list = element_list

    @classmethod
    def from_element(cls, element_list: ElementList, element: str,
                     preference_type: PreferenceType = PreferenceType.NONE
                     ) -> 'EnumerationEvaluation':
        return cls(element_list, element_list.index(element), preference_type)

    @property
    def element_list(self) -> ElementList:
        return self._element_list

    @property
    def element(self) -> str:
        """The name of the element this evaluation represents."""
        return self._element_list.element(self._value)

    def comparable_with(self, other: KnownEvaluation) -> bool:
        return super().comparable_with(other) \
            and self._element_list == other._element_list

    def _identity(self) -> tuple:
        return super()._identity() + (self._element_list,)

    def __str__(self):
        return self.element

    def __repr__(self):
        return 'EnumerationEvaluation({!r}, {})'.format(
            self.element, self._preference_type.name)


class MissingValue(Evaluation):
    """A missing evaluation. Its comparison outcome is fixed by its type:

    `when_left` is the result of any comparison with `self` as left operand,
    `when_right` is the result of comparing a known evaluation with `self`.
    """

    __slots__ = ()

    is_missing = True
    when_left: TernaryLogicValue
    when_right: TernaryLogicValue

    @property
    def preference_type(self) -> None:
        return None

    @property
    def equal_when_compared_to_any_evaluation(self) -> bool:
        return self.when_left is TernaryLogicValue.TRUE

    @property
    def equal_when_reverse_compared_to_any_evaluation(self) -> bool:
        return self.when_right is TernaryLogicValue.TRUE

    def __eq__(self, other):
        return type(self) is type(other)

    def __hash__(self):
        return hash(type(self))

    def __str__(self):
        return '?'

    def __repr__(self):
        return type(self).__name__ + '()'


class MissingValueMV15(MissingValue):
    """Missing value of type 1.5: as left operand it is at least as good as,
    at most as good as, and equal to anything; but no known evaluation is at
    least as good as, at most as good as, or equal to it.
    """
    __slots__ = ()
    when_left = TernaryLogicValue.TRUE
    when_right = TernaryLogicValue.FALSE


class MissingValueMV2(MissingValue):
    """Missing value of type 2: in both directions in any relation with
    anything.
    """
    __slots__ = ()
    when_left = TernaryLogicValue.TRUE
    when_right = TernaryLogicValue.TRUE


class MissingValueType(Enum):
    """Type of missing values used by an attribute."""
    MV15 = 'mv15'
    MV2 = 'mv2'

    @property
    def missing_value(self) -> MissingValue:
        """:return: The `MissingValue` instance of this type."""
        return MissingValueMV15() if self is MissingValueType.MV15 \
            else MissingValueMV2()

    @classmethod
    def of(cls, missing_value: MissingValue) -> 'MissingValueType':
        return cls.MV15 if isinstance(missing_value, MissingValueMV15) \
            else cls.MV2
