"""Tests for `sklearn_drsa.data`."""

import numpy as np
import pytest

from sklearn_drsa.data import (
    Attribute, AttributeType, CompositeDecision, DecisionDistribution,
    InformationTable, SimpleDecision, make_decision)
from sklearn_drsa.evaluation import (
    EnumerationEvaluation, IntegerEvaluation, MissingValueMV15,
    MissingValueMV2, PreferenceType, RealEvaluation, TernaryLogicValue)

GAIN = PreferenceType.GAIN


def _decision(value, attribute_index=1):
    return SimpleDecision(IntegerEvaluation(value, GAIN), attribute_index)


def test_table_validation():
    attributes = [Attribute('a', AttributeType.CONDITION, GAIN),
                  Attribute('d', AttributeType.DECISION, GAIN)]
    with pytest.raises(ValueError):
        InformationTable(attributes, [[IntegerEvaluation(1, GAIN)]])
    with pytest.raises(ValueError):
        InformationTable(None, [])
    with pytest.raises(ValueError):
        InformationTable(attributes, None)
    with pytest.raises(ValueError):
        InformationTable(attributes, [[1, IntegerEvaluation(1, GAIN)]])
    with pytest.raises(ValueError):
        InformationTable([Attribute('id1', AttributeType.IDENTIFICATION),
                          Attribute('id2', AttributeType.IDENTIFICATION)],
                         [['a', 'b']])
    with pytest.raises(ValueError):
        InformationTable(attributes, [], decision_classes=['x'])
    # an inactive identification attribute does not count
    InformationTable([Attribute('a', AttributeType.CONDITION, GAIN),
                      Attribute('id1', AttributeType.IDENTIFICATION),
                      Attribute('id2', AttributeType.IDENTIFICATION,
                                active=False)],
                     [[IntegerEvaluation(1, GAIN), 'a', 'b']])


def test_table_without_condition_attributes_warns():
    with pytest.warns(UserWarning):
        table = InformationTable(
            [Attribute('d', AttributeType.DECISION, GAIN)],
            [[IntegerEvaluation(1, GAIN)], [IntegerEvaluation(2, GAIN)]])
    assert table.get_active_condition_evaluations(1) == ()


def test_active_condition_evaluations():
    attributes = [Attribute('a', AttributeType.CONDITION, GAIN),
                  Attribute('b', AttributeType.CONDITION, GAIN, active=False),
                  Attribute('c', AttributeType.DESCRIPTION),
                  Attribute('e', AttributeType.CONDITION, GAIN),
                  Attribute('d', AttributeType.DECISION, GAIN)]
    rows = [[IntegerEvaluation(i, GAIN), 'not evaluated', 'text',
             IntegerEvaluation(-i, GAIN), IntegerEvaluation(i % 2, GAIN)]
            for i in range(3)]
    table = InformationTable(attributes, rows)
    assert table.n_objects == 3
    assert table.n_attributes == 5
    assert table.active_condition_attribute_indices == (0, 3)
    assert [a.name for a in table.active_condition_attributes] == ['a', 'e']
    assert table.get_active_condition_evaluations(2) == (
        IntegerEvaluation(2, GAIN), IntegerEvaluation(-2, GAIN))
    assert table.get_evaluation(1, 2) == 'text'
    assert table.get_decision(2) == _decision(0, 4)
    assert table.get_decision_class(0) is None
    with pytest.raises(IndexError):
        table.get_active_condition_evaluations(3)
    with pytest.raises(IndexError):
        table.get_decision(-1)
    assert table.get_evaluation(0, 4) == IntegerEvaluation(0, GAIN)
    for attribute_index in (-1, 5, 1.0, None):
        with pytest.raises(IndexError):
            table.get_evaluation(0, attribute_index)


def test_decisions():
    a = IntegerEvaluation(1, GAIN)
    b = IntegerEvaluation(2, GAIN)
    assert isinstance(make_decision([a], [3]), SimpleDecision)
    composite = make_decision([a, b], [3, 4])
    assert isinstance(composite, CompositeDecision)
    assert composite == CompositeDecision({4: b, 3: a})
    assert hash(composite) == hash(CompositeDecision({4: b, 3: a}))
    assert composite.is_at_least_as_good_as(make_decision([a, a], [3, 4])) \
        is TernaryLogicValue.TRUE
    assert composite.is_at_most_as_good_as(make_decision([a, a], [3, 4])) \
        is TernaryLogicValue.FALSE
    assert composite.is_equal_to(make_decision([a], [3])) \
        is TernaryLogicValue.UNCOMPARABLE
    assert _decision(1) != _decision(1, attribute_index=2)
    assert make_decision([MissingValueMV2()], [0]).has_all_missing_evaluations
    assert not make_decision([a, MissingValueMV2()], [0, 1]) \
        .has_no_missing_evaluation
    with pytest.raises(ValueError):
        make_decision([], [])
    with pytest.raises(ValueError):
        make_decision([a], [1, 2])


def test_decision_distribution():
    lo, mid, hi = _decision(0), _decision(1), _decision(2)
    distribution = DecisionDistribution([hi, lo, hi, mid, hi, lo])
    assert distribution.get_count(hi) == 3
    assert distribution.get_count(_decision(7)) == 0
    assert distribution.total == 6
    assert distribution.n_different_decisions == 3
    assert set(distribution.decisions) == {lo, mid, hi}
    assert distribution.mode() == [hi]
    assert distribution.median([lo, mid, hi]) == mid
    assert DecisionDistribution([lo, hi]).mode() == [lo, hi]
    assert DecisionDistribution([lo, hi, hi]).median([lo, hi]) == hi
    assert distribution == DecisionDistribution([lo, lo, mid, hi, hi, hi])
    assert distribution != DecisionDistribution([lo, mid, hi])
    with pytest.raises(ValueError):
        distribution.median([lo, hi])
    with pytest.raises(ValueError):
        distribution.increase_count(None)


def test_empty_decision_distribution():
    distribution = DecisionDistribution()
    assert distribution.total == 0
    assert distribution.mode() is None
    assert distribution.median([]) is None
    assert distribution.get_count(_decision(0)) == 0


def test_ordered_unique_fully_determined_decisions():
    attributes = [Attribute('a', AttributeType.CONDITION, GAIN),
                  Attribute('d', AttributeType.DECISION, GAIN)]
    decisions = [2, 0, None, 3, 0, 1, 2]
    rows = [[IntegerEvaluation(1, GAIN),
             MissingValueMV15() if d is None else IntegerEvaluation(d, GAIN)]
            for d in decisions]
    table = InformationTable(attributes, rows)
    assert table.ordered_unique_fully_determined_decisions() == \
        [_decision(d) for d in (0, 1, 2, 3)]


def test_with_decision_classes():
    attributes = [Attribute('a', AttributeType.CONDITION, GAIN)]
    table = InformationTable(attributes, [[IntegerEvaluation(i, GAIN)]
                                          for i in range(3)])
    labelled = table.with_decision_classes(['x', 'y', 'x'])
    assert labelled.get_decision_class(1) == 'y'
    assert table.decision_classes is None
    assert labelled.get_decision(0) is None
    assert not labelled.has_decisions


def test_from_array():
    X = np.array([[1.0, np.nan], [2.0, 0.5], [3.0, 0.25]])
    y = ['b', 'a', 'c']
    table = InformationTable.from_array(
        X, y, preference_types=['gain', 'cost'], missing_value_type='mv15',
        decision_order=['c', 'b', 'a'])
    assert table.n_attributes == 3
    assert table.get_evaluation(1, 0) == RealEvaluation(2.0, GAIN)
    assert table.get_evaluation(2, 1) == \
        RealEvaluation(0.25, PreferenceType.COST)
    assert isinstance(table.get_evaluation(0, 1), MissingValueMV15)
    decision = table.get_decision(1)
    assert isinstance(decision.evaluation, EnumerationEvaluation)
    assert str(decision) == 'a'
    # decision_order ranks 'a' best
    assert table.ordered_unique_fully_determined_decisions()[-1] == decision

    integer_table = InformationTable.from_array(np.array([[1, 2], [3, 4]]))
    assert integer_table.get_evaluation(1, 1) == IntegerEvaluation(4, GAIN)
    assert not integer_table.has_decisions

    lexicographic = InformationTable.from_array([[1], [2]], ['y', 'x'])
    assert lexicographic.get_decision(1).evaluation.value == 0


@pytest.mark.parametrize('kwargs', [
    dict(X=[1, 2, 3]),
    dict(X=[['a'], ['b']]),
    dict(X=[[1], [2]], preference_types=['gain', 'gain']),
    dict(X=[[1], [2]], preference_types='better'),
    dict(X=[[1], [2]], y=[1, 2, 3]),
    dict(X=[[1], [2]], y=[1, 2], decision_order=[1]),
    dict(X=[[1], [2]], y=[1, 2], decision_order=[1, 1, 2]),
    dict(X=[[1], [2]], missing_value_type='mv3'),
])
def test_from_array_invalid(kwargs):
    with pytest.raises(ValueError):
        InformationTable.from_array(**kwargs)
