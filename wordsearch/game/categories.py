"""Named word pools that rounds draw their words from."""

import logging
import random
import re
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator


logger = logging.getLogger(__name__)


DEFAULT_CATEGORIES: Dict[str, List[str]] = {
    "animals": [
        "LION", "TIGER", "ELEPHANT", "GIRAFFE", "ZEBRA", "MONKEY", "PENGUIN", "DOLPHIN",
        "SHARK", "EAGLE", "OWL", "BEAR", "WOLF", "FOX", "DEER",
    ],
    "disney": [
        "MICKEY", "MINNIE", "DONALD", "GOOFY", "PLUTO", "SIMBA", "MUFASA", "NALA",
        "TIMON", "PUMBAA", "ALADDIN", "JASMINE", "GENIE", "JAFAR", "ABU",
    ],
    "famousLandmarks": [
        "EIFEL", "TOWER", "STATUE", "LIBERTY", "PYRAMIDS", "COLOSSEUM", "TAJMAHAL",
        "GREATWALL", "BIGBEN", "SYDNEYOPERA", "CHRISTREDEEMER", "MACHUPICCHU", "PETRA",
        "ANGKORWAT", "STONEHENGE",
    ],
    "friendsAndFamilies": [
        "MOTHER", "FATHER", "SISTER", "BROTHER", "GRANDMA", "GRANDPA", "AUNT", "UNCLE",
        "COUSIN", "NIECE", "NEPHEW", "DAUGHTER", "SON", "WIFE", "HUSBAND",
    ],
    "fruits": [
        "APPLE", "BANANA", "ORANGE", "GRAPE", "WATERMELON", "STRAWBERRY", "PINEAPPLE",
        "MANGO", "KIWI", "PEACH", "PLUM", "CHERRY", "LEMON", "LIME", "BLUEBERRY",
    ],
    "greekGods": [
        "ZEUS", "HERA", "POSEIDON", "HADES", "ATHENA", "APOLLO", "ARTEMIS", "ARES",
        "APHRODITE", "HERMES", "HEPHAESTUS", "DEMETER", "DIONYSUS", "HESTIA", "PERSEPHONE",
    ],
    "harryPotter": [
        "HARRY", "RON", "HERMIONE", "DUMBLEDORE", "VOLDEMORT", "HAGRID", "SNAPE", "MALFOY",
        "GINNY", "NEVILLE", "SIRIUS", "LUPIN", "MCGONAGALL", "DEMENTOR",
    ],
    "space": [
        "SUN", "MOON", "EARTH", "MARS", "JUPITER", "SATURN", "NEPTUNE", "VENUS",
        "MERCURY", "PLUTO", "GALAXY", "STAR", "COMET", "ASTEROID", "NEBULA",
    ],
    "superheroes": [
        "SUPERMAN", "BATMAN", "SPIDERMAN", "IRONMAN", "THOR", "HULK", "WONDERWOMAN",
        "FLASH", "CAPTAINAMERICA", "BLACKWIDOW", "DEADPOOL", "WOLVERINE", "STORM",
        "CYBORG", "AQUAMAN",
    ],
    "vampireDiaries": [
        "DAMON", "STEFAN", "ELENA", "CAROLINE", "BONNIE", "KLAUS", "KATHERINE", "TYLER",
        "MATT", "JEREMY", "ALARIC", "REBEKAH", "KOL", "FINN", "ELIJAH",
    ],
    "vegetables": [
        "CARROT", "BROCCOLI", "SPINACH", "POTATO", "TOMATO", "CUCUMBER", "PEPPER", "ONION",
        "GARLIC", "CORN", "CELERY", "ASPARAGUS", "CAULIFLOWER", "EGGPLANT", "ZUCCHINI",
    ],
}

CATEGORY_DESCRIPTIONS: Dict[str, str] = {
    "animals": "Find various animal names",
    "disney": "Disney characters and movies",
    "famousLandmarks": "Famous landmarks around the world",
    "friendsAndFamilies": "Family and relationship terms",
    "fruits": "Various fruit names",
    "greekGods": "Greek mythology deities",
    "harryPotter": "Harry Potter characters and terms",
    "space": "Space and astronomy terms",
    "superheroes": "Superhero names and characters",
    "vampireDiaries": "Vampire Diaries characters",
    "vegetables": "Various vegetable names",
}

_NON_LETTERS = re.compile(r'[^A-Z]')


def normalize_words(words: List[str]) -> List[str]:
    """Uppercase, strip non-letters and drop duplicates, keeping first-seen order."""
    seen = set()
    result = []
    for word in words:
        cleaned = _NON_LETTERS.sub('', str(word).upper())
        if cleaned and cleaned not in seen:
            seen.add(cleaned)
            result.append(cleaned)
    return result


class CategorySource(BaseModel):
    """
    Provides round word lists from named categories.

    Attributes:
        categories: Mapping of category name to its unique uppercase words
    """

    categories: Dict[str, List[str]] = Field(
        default_factory=lambda: {name: list(words) for name, words in DEFAULT_CATEGORIES.items()}
    )

    @field_validator("categories")
    @classmethod
    def _normalize(cls, value: Dict[str, List[str]]) -> Dict[str, List[str]]:
        return {name: normalize_words(words) for name, words in value.items()}

    @classmethod
    def from_yaml(cls, path: str | Path, include_defaults: bool = True) -> "CategorySource":
        """
        Load categories from a YAML mapping of name -> list of words.

        Args:
            path: YAML file path
            include_defaults: Keep the built-in categories alongside the loaded ones

        Returns:
            A CategorySource with the loaded categories
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Categories file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Categories file must contain a mapping, got {type(data).__name__}")

        categories = {name: list(words) for name, words in DEFAULT_CATEGORIES.items()} if include_defaults else {}
        categories.update({str(name): list(words or []) for name, words in data.items()})

        logger.info("Loaded %d categories from %s", len(data), path)
        return cls(categories=categories)

    @property
    def category_names(self) -> List[str]:
        return list(self.categories.keys())

    def get_category_words(self, category_name: str) -> List[str]:
        """All words of a category (empty for unknown categories)."""
        return list(self.categories.get(category_name, []))

    def get_random_words(
        self,
        category_name: str,
        count: int = 10,
        rng: Optional[random.Random] = None,
    ) -> List[str]:
        """
        Draw up to count distinct words from a category in random order.

        Args:
            category_name: Category to draw from
            count: Number of words wanted; capped to the category size
            rng: Random source for the shuffle

        Returns:
            Shuffled words, or an empty list if the category is unknown or empty
        """
        words = self.get_category_words(category_name)
        if not words:
            logger.error("No words found for category: %s", category_name)
            return []

        count = max(0, min(count, len(words)))

        # Fisher-Yates shuffle on a copy
        rng = rng or random.Random()
        rng.shuffle(words)
        return words[:count]

    def random_category(self, rng: Optional[random.Random] = None) -> str:
        """Pick a category name at random."""
        rng = rng or random.Random()
        return rng.choice(self.category_names)

    @staticmethod
    def display_name(category_name: str) -> str:
        """Convert a camelCase category name to Title Case."""
        spaced = re.sub(r'([A-Z])', r' \1', category_name).strip()
        return spaced[:1].upper() + spaced[1:]

    @staticmethod
    def description(category_name: str) -> str:
        return CATEGORY_DESCRIPTIONS.get(category_name, "A collection of words")
