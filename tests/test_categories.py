import random

import pytest

from wordsearch.game import CategorySource, DEFAULT_CATEGORIES
from wordsearch.game.categories import normalize_words


class TestBuiltInCategories:
    def test_all_categories_present(self):
        """All eleven built-in categories are available."""
        source = CategorySource()
        assert set(source.category_names) == set(DEFAULT_CATEGORIES)
        assert len(source.category_names) == 11

    def test_words_unique_and_uppercase(self):
        """Built-in word lists are non-empty, uppercase and free of duplicates."""
        source = CategorySource()
        for name in source.category_names:
            words = source.get_category_words(name)
            assert words, name
            assert len(words) == len(set(words))
            assert all(w.isalpha() and w.isupper() for w in words)


class TestGetRandomWords:
    def test_count(self):
        """The requested number of distinct words comes from the category."""
        words = CategorySource().get_random_words("animals", 5, random.Random(0))
        assert len(words) == 5
        assert len(set(words)) == 5
        assert set(words) <= set(DEFAULT_CATEGORIES["animals"])

    def test_count_capped(self):
        """Asking for more words than exist returns the whole category."""
        source = CategorySource(categories={"tiny": ["CAT", "DOG"]})
        assert sorted(source.get_random_words("tiny", 8)) == ["CAT", "DOG"]

    def test_unknown_category(self):
        """An unknown category gives no words."""
        assert CategorySource().get_random_words("nope", 5) == []

    def test_order_is_shuffled_reproducibly(self):
        """The same seed gives the same shuffled order."""
        source = CategorySource()
        first = source.get_random_words("fruits", 15, random.Random(9))
        second = source.get_random_words("fruits", 15, random.Random(9))
        assert first == second
        assert sorted(first) == sorted(source.get_category_words("fruits"))

    def test_source_not_mutated(self):
        """Drawing words leaves the category list untouched."""
        source = CategorySource()
        before = source.get_category_words("space")
        source.get_random_words("space", 3, random.Random(1))
        assert source.get_category_words("space") == before


class TestNames:
    @pytest.mark.parametrize("name,expected", [
        ("animals", "Animals"),
        ("famousLandmarks", "Famous Landmarks"),
        ("friendsAndFamilies", "Friends And Families"),
        ("Space", "Space"),
    ])
    def test_display_name(self, name, expected):
        """camelCase names are split into title case words."""
        assert CategorySource.display_name(name) == expected

    def test_description(self):
        """Unknown categories get a generic description."""
        assert CategorySource.description("greekGods") == "Greek mythology deities"
        assert CategorySource.description("custom") == "A collection of words"

    def test_random_category(self):
        """A random pick is always a known category."""
        source = CategorySource()
        assert source.random_category(random.Random(0)) in source.category_names


class TestLoading:
    def test_normalize_words(self):
        """Words are uppercased, stripped of non-letters and deduplicated."""
        assert normalize_words(["red", "Blue ", "RED", "sky-blue", "42"]) == ["RED", "BLUE", "SKYBLUE"]

    def test_from_yaml(self, tmp_path):
        """YAML categories are normalized and added to the built-in ones."""
        path = tmp_path / "categories.yaml"
        path.write_text("colors:\n  - red\n  - Blue\n  - red\n")

        source = CategorySource.from_yaml(path)

        assert source.get_category_words("colors") == ["RED", "BLUE"]
        assert "animals" in source.category_names

    def test_from_yaml_without_defaults(self, tmp_path):
        """Built-in categories can be left out."""
        path = tmp_path / "categories.yaml"
        path.write_text("colors: [red, green]\n")
        source = CategorySource.from_yaml(path, include_defaults=False)
        assert source.category_names == ["colors"]

    def test_missing_file(self, tmp_path):
        """A missing categories file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            CategorySource.from_yaml(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path):
        """A YAML list instead of a mapping is rejected."""
        path = tmp_path / "categories.yaml"
        path.write_text("- red\n- green\n")
        with pytest.raises(ValueError):
            CategorySource.from_yaml(path)
