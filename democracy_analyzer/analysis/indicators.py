"""
The four key indicators of authoritarian behavior from "How Democracies Die".

Each indicator carries a fixed keyword list. Keyword order matters: the
example labeler assigns the first keyword hit in declaration order.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Indicator:
    """
    One category of authoritarian-language signal.

    Attributes:
        id: Indicator number (1-4), also used as the classifier label
        name: Short display name
        description: What the indicator captures
        keywords: Lower-case keywords and phrases, in declaration order
    """
    id: int
    name: str
    description: str
    keywords: tuple[str, ...]


INDICATORS: tuple[Indicator, ...] = (
    Indicator(
        id=1,
        name="Rejection of democratic rules",
        description=(
            "Rejection or weak commitment to democratic rules of the game, such as refusing "
            "to accept election results, suggesting the need to suspend the constitution, "
            "or advocating extraconstitutional measures."
        ),
        keywords=(
            "constitution", "election", "suspend", "reject", "rules", "democracy", "coup",
            "overthrow", "military", "extraconstitutional", "martial law", "emergency powers",
            "override", "ignore results", "rigged election", "stolen election", "illegal votes",
            "constitutional crisis", "refuse to concede", "refuse to accept", "delay election",
            "postpone election", "cancel election", "nullify",
        ),
    ),
    Indicator(
        id=2,
        name="Denial of legitimacy of opponents",
        description=(
            "Denying the legitimacy of political opponents, describing them as subversive, "
            "criminal, or foreign agents who pose an existential threat."
        ),
        keywords=(
            "enemy", "traitor", "criminal", "subversive", "illegitimate", "threat", "foreign",
            "agent", "spy", "terrorist", "corrupt", "radical", "extremist", "dangerous",
            "un-american", "unpatriotic", "treasonous", "sedition", "conspiracy", "deep state",
            "puppet", "controlled by", "infiltrated", "fifth column", "disloyal",
            "enemy of the people", "enemy of the state", "lock them up",
        ),
    ),
    Indicator(
        id=3,
        name="Toleration of violence",
        description=(
            "Tolerating or encouraging violence, or showing a willingness to curtail civil "
            "liberties of opponents, including media."
        ),
        keywords=(
            "violence", "force", "attack", "suppress", "silence", "censor", "media", "journalist",
            "protest", "civil liberties", "rights", "crackdown", "crush", "destroy", "eliminate",
            "rough up", "beat", "fight back", "take them out", "punch", "second amendment",
            "armed", "militia", "mob", "riot", "storm", "take by force", "blood", "sacrifice",
            "battle", "war", "combat", "struggle",
        ),
    ),
    Indicator(
        id=4,
        name="Readiness to curtail civil liberties",
        description=(
            "Readiness to curtail civil liberties of opponents, including media freedom, or "
            "showing support for measures that would restrict rights."
        ),
        keywords=(
            "restrict", "limit", "curtail", "freedom", "liberty", "rights", "press", "speech",
            "assembly", "opposition", "dissent", "ban", "shut down", "close", "censor", "silence",
            "gag", "muzzle", "fake news", "enemy of the people", "libel laws", "defamation",
            "national security", "surveillance", "monitor", "track", "investigate", "detain",
            "arrest", "imprison", "deport", "expel",
        ),
    ),
)


def get_indicator(indicator_id: int) -> Indicator:
    """
    Look up an indicator by id.

    Raises:
        KeyError: If no indicator has that id
    """
    for indicator in INDICATORS:
        if indicator.id == indicator_id:
            return indicator
    raise KeyError(f"Unknown indicator id {indicator_id}. Valid ids: 1-{len(INDICATORS)}")
