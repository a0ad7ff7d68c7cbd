"""
Lexicon-based entity extraction.

Runs of capitalized words ("Supreme Court of Venezuela", "General
Pinochet") are proper-noun candidates. Each run is sorted by small fixed
lexicons, checked in this order:
- people: the run starts with a title or honorific
- organizations: the run contains an institution word, or is an acronym
- places: the run is a known place name or contains a place word
Runs matching none of them (usually sentence-initial words) are dropped.

Common nouns are lower-case words following a determiner, or carrying a
noun suffix such as -tion or -ment.
"""

import re
from dataclasses import dataclass

TITLES = frozenset({
    'president', 'vice', 'general', 'senator', 'governor', 'mayor', 'judge',
    'justice', 'minister', 'prime', 'chancellor', 'king', 'queen', 'prince',
    'colonel', 'commander', 'chairman', 'congressman', 'congresswoman',
    'representative', 'secretary', 'ambassador', 'dictator',
    'mr', 'mrs', 'ms', 'dr', 'gen', 'sen', 'gov', 'rep',
})

ORGANIZATION_WORDS = frozenset({
    'party', 'congress', 'court', 'senate', 'parliament', 'ministry',
    'department', 'agency', 'army', 'council', 'committee', 'union',
    'university', 'association', 'corporation', 'company', 'inc', 'times',
    'post', 'commission', 'bureau', 'assembly', 'front', 'movement',
    'institute', 'foundation', 'bank', 'tribunal', 'guard', 'network',
})

PLACES = frozenset({
    'america', 'united states', 'latin america', 'europe', 'asia', 'africa',
    'venezuela', 'hungary', 'turkey', 'chile', 'argentina', 'peru', 'brazil',
    'germany', 'italy', 'spain', 'russia', 'poland', 'philippines', 'ecuador',
    'nicaragua', 'britain', 'france', 'mexico', 'india', 'china',
    'washington', 'caracas', 'budapest', 'ankara', 'istanbul', 'santiago',
    'lima', 'berlin', 'rome', 'moscow', 'warsaw', 'london', 'paris',
})

PLACE_WORDS = frozenset({
    'city', 'county', 'state', 'province', 'republic', 'kingdom', 'street',
    'river', 'island', 'valley', 'district',
})

# Capitalized only because they open a sentence or clause
LEADING_WORDS = frozenset({
    'the', 'a', 'an', 'he', 'she', 'they', 'we', 'i', 'it', 'his', 'her',
    'their', 'its', 'our', 'this', 'that', 'these', 'those', 'but', 'and',
    'or', 'when', 'after', 'before', 'if', 'in', 'on', 'at', 'as', 'for',
    'then', 'while', 'former',
})

DETERMINERS = frozenset({
    'the', 'a', 'an', 'this', 'that', 'these', 'those', 'his', 'her',
    'their', 'its', 'our', 'my', 'your', 'every', 'each',
})

NOUN_SUFFIXES = ('tion', 'sion', 'ment', 'ness', 'ity', 'ism', 'ship', 'ance', 'ence')
MIN_SUFFIX_NOUN_LENGTH = 6

_PROPER_WORD = r"(?:(?:Mr|Mrs|Ms|Dr|Gen|Sen|Gov|Rep)\.|[A-Z][\w'-]*)"
_PROPER_RUN = re.compile(rf"\b{_PROPER_WORD}(?:[ \t]+(?:of[ \t]+(?:the[ \t]+)?)?{_PROPER_WORD})*")
_WORD = re.compile(r"[A-Za-z][\w'-]*")


@dataclass(frozen=True)
class Entities:
    """
    Entities found in a text, each list in first-seen order without repeats.

    Attributes:
        people: Titled names ("President Chávez")
        places: Countries, cities and other locations
        organizations: Institutions, parties and acronyms
        topics: People, places and organizations together, in text order
        nouns: Lower-case common nouns
    """
    people: tuple[str, ...] = ()
    places: tuple[str, ...] = ()
    organizations: tuple[str, ...] = ()
    topics: tuple[str, ...] = ()
    nouns: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, list[str]]:
        return {
            'people': list(self.people),
            'places': list(self.places),
            'organizations': list(self.organizations),
            'topics': list(self.topics),
            'nouns': list(self.nouns),
        }


def _classify(words: list[str]) -> str | None:
    folded = [word.lower().rstrip('.') for word in words]

    if folded[0] in TITLES and any(word not in TITLES for word in folded):
        return 'people'
    if any(word in ORGANIZATION_WORDS for word in folded):
        return 'organizations'
    if len(words) == 1 and len(words[0]) >= 2 and words[0].isupper():
        return 'organizations'
    if ' '.join(folded) in PLACES or any(word in PLACES or word in PLACE_WORDS for word in folded):
        return 'places'
    return None


def _extract_nouns(text: str) -> list[str]:
    nouns: dict[str, None] = {}
    previous = ''
    for word in _WORD.findall(text):
        folded = word.lower()
        if (
            word[0].islower()
            and folded not in DETERMINERS
            and len(folded) >= 3
            and (
                previous in DETERMINERS
                or (len(folded) >= MIN_SUFFIX_NOUN_LENGTH and folded.endswith(NOUN_SUFFIXES))
            )
        ):
            nouns.setdefault(folded)
        previous = folded
    return list(nouns)


def extract_entities(text: str) -> Entities:
    """
    Find people, places, organizations and common nouns in text.

    Never raises. Empty or non-string input gives an empty Entities.
    """
    if not isinstance(text, str) or not text.strip():
        return Entities()

    found: dict[str, dict[str, None]] = {
        'people': {}, 'places': {}, 'organizations': {},
    }
    topics: dict[str, None] = {}

    for match in _PROPER_RUN.finditer(text):
        words = match.group(0).split()
        while words and words[0].lower() in LEADING_WORDS:
            words.pop(0)
        if not words:
            continue

        kind = _classify(words)
        if kind is None:
            continue
        name = ' '.join(words)
        found[kind].setdefault(name)
        topics.setdefault(name)

    return Entities(
        people=tuple(found['people']),
        places=tuple(found['places']),
        organizations=tuple(found['organizations']),
        topics=tuple(topics),
        nouns=tuple(_extract_nouns(text)),
    )
