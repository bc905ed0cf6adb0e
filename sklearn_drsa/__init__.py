"""Dominance-based rough set approach: dominance cones and the decision
distributions within them.

Limitations / Assumptions
=====

- information tables are immutable, distributions are computed once for a
  table and never updated incrementally
- all computations are O(n_objects²) in time, the numpy implementation also
  in memory
- `InformationTable.from_array` only accepts numeric features; enumerated
  condition attributes need an explicitly constructed `InformationTable`
- no pair evaluations (intervals of values)
- no rough approximations, reducts or rule induction on top of the
  distributions
"""

__all__ = ['data', 'distributions', 'dominance', 'estimator', 'evaluation',
           'extra', 'tests', 'util']
