"""pytest fixtures for the test cases in this directory."""

import pytest

from sklearn_drsa.data import DecisionDistribution

from .datasets import Dataset, \
    three_objects_gain, mixed_preferences_with_missing, nominal_colors, \
    random_table, empty_table


def assert_distribution_counts(distribution: DecisionDistribution,
                               expected: dict):
    """Fail unless `distribution` counts exactly the keys of `expected`, as
    often as given there.
    """
    assert distribution.as_dict() == expected


# pytest plugin, to print the table on test failure
@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    default = yield
    report = default.get_result()
    if report.failed and report.user_properties:
        for name, prop in report.user_properties:
            if name == 'table':
                report.longrepr.addsection(name, str(prop))
                break
    return default


@pytest.fixture
def record_table(record_property):
    def _record(dataset: Dataset):
        record_property("table", '\n'.join(
            ' '.join(str(evaluation) for evaluation in row)
            for row in dataset.table.rows))
    return _record


@pytest.fixture(params=['python', 'numpy'])
def implementation(request) -> str:
    """Fixture running for each way of computing dominance cones."""
    return request.param


@pytest.fixture(params=[
    three_objects_gain,
    mixed_preferences_with_missing,
    nominal_colors,
    random_table,
    pytest.param(lambda: random_table(missing_value_type='mv15'),
                 id='random_table_mv15'),
    pytest.param(lambda: random_table(n_objects=12, n_features=1,
                                      missing_ratio=0.3),
                 id='random_table_1d'),
    empty_table,
])
def dataset(request, record_table) -> Dataset:
    """Fixture running for each of the tables from `datasets`."""
    ds = request.param()
    record_table(ds)
    return ds
