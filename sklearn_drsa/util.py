"""
Miscellaneous things not depending on anything else from sklearn_drsa.
"""

from typing import List, Optional, Sequence, Tuple

import numpy as np

from sklearn.preprocessing import LabelEncoder
from sklearn.utils.multiclass import type_of_target

from sklearn_drsa.evaluation import PreferenceType


def check_object_index(index, n_objects: int) -> int:
    """:return: `index` as plain int, if it addresses one of `n_objects`
        objects.
    :raise IndexError: if `index` is no integer, is negative or is not less
        than `n_objects`.
    """
    if isinstance(index, (bool, np.bool_)) \
            or not isinstance(index, (int, np.integer)):
        raise IndexError("Object index must be an integer, got %r" % (index,))
    if not 0 <= index < n_objects:
        raise IndexError("Object index %d out of range for %d objects"
                         % (index, n_objects))
    return int(index)


def build_preference_types(which_features, n_features: int
                           ) -> Optional[List[PreferenceType]]:
    """:return: A list of length `n_features` holding the `PreferenceType` of
        each feature, based on `which_features`:

        - None: all features are of type GAIN
        - a single `PreferenceType` or its name ('gain', 'cost', 'none'):
          all features are of that type
        - a sequence of length `n_features` of these

        Returns None if `which_features` cannot be recognized.
    """
    if which_features is None:
        return [PreferenceType.GAIN] * n_features
    if isinstance(which_features, (str, PreferenceType)):
        try:
            return [PreferenceType(which_features)] * n_features
        except ValueError:
            return None
    if isinstance(which_features, (Sequence, np.ndarray)) \
            and len(which_features) == n_features:
        try:
            return [PreferenceType(which) for which in which_features]
        except ValueError:
            return None
    return None


def encode_decisions(y, decision_order=None) -> Tuple[np.ndarray, np.ndarray]:
    """Encode class labels as indices into an ordered list of classes.

    :param decision_order: The classes in ascending preference order. If None,
        the lexicographic order of `LabelEncoder` is used.
    :return: `(classes, codes)` where `classes[codes[i]] == y[i]`.
    """
    if decision_order is None:
        target_type = type_of_target(y)
        if target_type not in {'binary', 'multiclass'}:
            raise ValueError("Unknown label type: %s not supported (of y=%s)"
                             % (target_type, y))
        encoder = LabelEncoder().fit(y)
        return encoder.classes_, encoder.transform(y)
    classes = np.asarray(decision_order)
    if len(np.unique(classes)) != len(classes):
        raise ValueError("decision_order contains duplicates: %s" % (classes,))
    code_by_class = {label: code for code, label in enumerate(classes.tolist())}
    try:
        codes = np.array([code_by_class[label] for label in np.asarray(y).tolist()],
                         dtype=int)
    except KeyError as e:
        raise ValueError("y contains label %r missing from decision_order %s"
                         % (e.args[0], classes)) from None
    return classes, codes
