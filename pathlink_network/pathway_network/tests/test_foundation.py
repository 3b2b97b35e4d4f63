"""
Tests for pathway network foundations.
"""

import itertools

import numpy as np
import pandas as pd
import pytest

from pathlink_network.data_loaders import PathwayDatabase
from pathlink_network.exceptions import ConfigurationError, SchemaError
from pathlink_network.pathway_network import (
    FOUNDATION_COLUMNS,
    FoundationConfig,
    candidate_pairs,
    n_pairs_to_keep,
    pathnet_foundation,
)


def distance_matrix(ids, pair_distances):
    """Symmetric matrix from {(id1, id2): distance}."""
    matrix = pd.DataFrame(0.0, index=ids, columns=ids)
    for (a, b), d in pair_distances.items():
        matrix.loc[a, b] = d
        matrix.loc[b, a] = d
    return matrix


@pytest.fixture
def small_matrix():
    ids = ["R-1", "R-2", "R-3", "R-4"]
    return distance_matrix(
        ids,
        {
            ("R-1", "R-2"): 0.2,
            ("R-1", "R-3"): 0.8,
            ("R-1", "R-4"): 0.9,
            ("R-2", "R-3"): 0.0,  # identical gene sets
            ("R-2", "R-4"): 0.5,
            ("R-3", "R-4"): 0.8,
        },
    )


@pytest.fixture
def hundred_pairs():
    """15 pathways: 105 pairs, 5 of them at distance zero."""
    ids = [f"P{i:02d}" for i in range(15)]
    pairs = list(itertools.combinations(ids, 2))
    rng = np.random.default_rng(7)
    values = (rng.permutation(len(pairs)) + 1) / (len(pairs) + 1)
    distances = dict(zip(pairs, values))
    for pair in pairs[:5]:
        distances[pair] = 0.0
    return distance_matrix(ids, distances)


class TestMaxDistance:
    def test_inclusive_cutoff(self, small_matrix):
        foundation = pathnet_foundation(small_matrix, max_distance=0.8)
        pairs = set(zip(foundation["pathway1"], foundation["pathway2"]))
        assert pairs == {("R-1", "R-2"), ("R-2", "R-4"), ("R-1", "R-3"), ("R-3", "R-4")}

    def test_zero_distance_excluded(self, small_matrix):
        foundation = pathnet_foundation(small_matrix, max_distance=1.0)
        assert (foundation["distance"] > 0).all()
        assert len(foundation) == 5

    def test_sorted_by_distance(self, small_matrix):
        foundation = pathnet_foundation(small_matrix, max_distance=1.0)
        assert list(foundation["distance"]) == sorted(foundation["distance"])
        assert list(foundation.columns) == FOUNDATION_COLUMNS

    def test_each_pair_once(self, hundred_pairs):
        foundation = pathnet_foundation(hundred_pairs, max_distance=1.0)
        unordered = {frozenset(p) for p in zip(foundation["pathway1"], foundation["pathway2"])}
        assert len(unordered) == len(foundation) == 100

    def test_nothing_within_cutoff(self, small_matrix):
        foundation = pathnet_foundation(small_matrix, max_distance=0.1)
        assert foundation.empty
        assert list(foundation.columns) == FOUNDATION_COLUMNS


class TestPropToKeep:
    def test_ten_percent_of_hundred(self, hundred_pairs):
        foundation = pathnet_foundation(hundred_pairs, prop_to_keep=0.1)

        nonzero = sorted(candidate_pairs(hundred_pairs)["distance"])
        assert len(nonzero) == 100
        assert len(foundation) == 10
        assert (foundation["distance"] <= nonzero[10]).all()
        assert (foundation["distance"] > 0).all()

    def test_at_least_one_pair(self, small_matrix):
        foundation = pathnet_foundation(small_matrix, prop_to_keep=0.01)
        assert len(foundation) == 1
        assert foundation.iloc[0]["distance"] == pytest.approx(0.2)

    def test_keep_all(self, small_matrix):
        foundation = pathnet_foundation(small_matrix, prop_to_keep=1.0)
        assert len(foundation) == 5

    @pytest.mark.parametrize(
        "n,prop,expected",
        [(100, 0.1, 10), (100, 0.29, 29), (7, 0.5, 3), (3, 0.01, 1), (0, 0.5, 0)],
    )
    def test_n_pairs_to_keep(self, n, prop, expected):
        assert n_pairs_to_keep(n, prop) == expected


class TestNames:
    def test_names_from_mapping(self, small_matrix):
        names = {"R-1": "Interferon signaling", "R-2": "Cytokine signaling"}
        foundation = pathnet_foundation(small_matrix, max_distance=0.2, pathway_names=names)

        row = foundation.iloc[0]
        assert row["pathway_name1"] == "Interferon signaling"
        assert row["pathway_name2"] == "Cytokine signaling"

    def test_names_from_database(self, small_matrix):
        db = PathwayDatabase(
            pathways={"R-1": {"A"}, "R-4": {"B"}},
            pathway_names={"R-1": "One", "R-4": "Four"},
        )
        foundation = pathnet_foundation(small_matrix, prop_to_keep=1.0, pathway_names=db)
        last = foundation.iloc[-1]
        assert (last["pathway1"], last["pathway2"]) == ("R-1", "R-4")
        assert (last["pathway_name1"], last["pathway_name2"]) == ("One", "Four")

    def test_missing_names(self, small_matrix):
        foundation = pathnet_foundation(small_matrix, max_distance=1.0)
        assert foundation["pathway_name1"].isna().all()


class TestValidation:
    def test_neither_cutoff(self, small_matrix):
        with pytest.raises(ConfigurationError):
            pathnet_foundation(small_matrix)

    def test_both_cutoffs(self, small_matrix):
        with pytest.raises(ConfigurationError):
            pathnet_foundation(small_matrix, max_distance=0.5, prop_to_keep=0.1)

    @pytest.mark.parametrize("prop", [0.0, -0.1, 1.5])
    def test_prop_out_of_range(self, small_matrix, prop):
        with pytest.raises(ConfigurationError):
            pathnet_foundation(small_matrix, prop_to_keep=prop)

    def test_negative_max_distance(self, small_matrix):
        with pytest.raises(ConfigurationError):
            pathnet_foundation(small_matrix, max_distance=-1)

    def test_not_square(self, small_matrix):
        with pytest.raises(SchemaError):
            pathnet_foundation(small_matrix.iloc[:, :3], max_distance=1.0)

    def test_not_symmetric(self, small_matrix):
        matrix = small_matrix.copy()
        matrix.loc["R-1", "R-2"] = 0.3
        with pytest.raises(SchemaError):
            pathnet_foundation(matrix, max_distance=1.0)

    def test_negative_distance(self, small_matrix):
        matrix = small_matrix.copy()
        matrix.loc["R-1", "R-2"] = matrix.loc["R-2", "R-1"] = -0.2
        with pytest.raises(SchemaError):
            pathnet_foundation(matrix, max_distance=1.0)

    def test_columns_realigned(self, small_matrix):
        shuffled = small_matrix[["R-4", "R-2", "R-1", "R-3"]]
        expected = pathnet_foundation(small_matrix, max_distance=1.0)
        result = pathnet_foundation(shuffled, max_distance=1.0)
        pd.testing.assert_frame_equal(result, expected)

    def test_config_validate(self):
        config = FoundationConfig(prop_to_keep=0.2, dist_method="dice").validate()
        assert config.dist_method.value == "dice"
