"""Default implementation of the entity recognizer interface.

This module provides simple, dependency free parsing primitives used by the
prompt interpreters: numbers, yes/no answers, fuzzy choice matching and a small
set of English date/time expressions.
"""

import math
import re
from datetime import datetime, timedelta
from difflib import SequenceMatcher
from typing import Callable, List, Optional, Tuple

from turnprompt.types import ChoiceSource
from turnprompt.utils.logging import logger

from .message_models import ChoiceMatch, NumberEntity, TimeEntity, TimeResolution
from .recognizer_interfaces import EntityRecognizerInterface

NUMBER_EXP = re.compile(r"[+-]?(?:\d+\.?\d*|\d*\.?\d+)")
YES_EXP = re.compile(r"^(1|y|yes|yep|yeah|sure|ok|okay|true)\b", re.IGNORECASE)
NO_EXP = re.compile(r"^(2|n|no|nope|not|false)\b", re.IGNORECASE)

_UNITS = {
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
}
_DAY_OFFSETS = {"today": 0, "tonight": 0, "tomorrow": 1, "yesterday": -1}
_WEEKDAYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

# (resolved datetime, carries a time of day)
_DateResolution = Tuple[datetime, bool]


def _count(token: str) -> int:
    return 1 if token.lower() in ("a", "an") else int(token)


def _resolve_now(_match: re.Match, ref: datetime) -> _DateResolution:
    return ref, True


def _resolve_day_word(match: re.Match, ref: datetime) -> _DateResolution:
    return ref + timedelta(days=_DAY_OFFSETS[match.group(1).lower()]), False


def _resolve_in(match: re.Match, ref: datetime) -> _DateResolution:
    unit = match.group(2).lower()
    return ref + _UNITS[unit] * _count(match.group(1)), unit in ("minute", "hour")


def _resolve_ago(match: re.Match, ref: datetime) -> _DateResolution:
    unit = match.group(2).lower()
    return ref - _UNITS[unit] * _count(match.group(1)), unit in ("minute", "hour")


def _resolve_iso(match: re.Match, ref: datetime) -> _DateResolution:
    year, month, day = (int(g) for g in match.groups())
    return ref.replace(year=year, month=month, day=day, hour=12, minute=0, second=0, microsecond=0), False


def _resolve_slash(match: re.Match, ref: datetime) -> _DateResolution:
    month, day, year = match.groups()
    full_year = ref.year
    if year:
        full_year = int(year) + 2000 if len(year) == 2 else int(year)
    return (
        ref.replace(year=full_year, month=int(month), day=int(day), hour=12, minute=0, second=0, microsecond=0),
        False,
    )


def _resolve_weekday(match: re.Match, ref: datetime) -> _DateResolution:
    modifier = (match.group(1) or "").lower()
    target = _WEEKDAYS.index(match.group(2).lower())
    if modifier == "last":
        delta = -((ref.weekday() - target) % 7 or 7)
    else:
        delta = (target - ref.weekday()) % 7
        if modifier == "next" and delta == 0:
            delta = 7
    day = ref + timedelta(days=delta)
    return day.replace(hour=12, minute=0, second=0, microsecond=0), False


_DATE_PATTERNS: List[Tuple[re.Pattern, Callable[[re.Match, datetime], _DateResolution]]] = [
    (re.compile(r"\b(?:right\s+)?now\b", re.IGNORECASE), _resolve_now),
    (re.compile(r"\b(today|tonight|tomorrow|yesterday)\b", re.IGNORECASE), _resolve_day_word),
    (re.compile(r"\bin\s+(\d+|an?)\s+(minute|hour|day|week)s?\b", re.IGNORECASE), _resolve_in),
    (re.compile(r"\b(\d+|an?)\s+(minute|hour|day|week)s?\s+ago\b", re.IGNORECASE), _resolve_ago),
    (re.compile(r"\b(\d{4})-(\d{1,2})-(\d{1,2})\b"), _resolve_iso),
    (re.compile(r"\b(\d{1,2})/(\d{1,2})(?:/(\d{2}|\d{4}))?\b"), _resolve_slash),
    (
        re.compile(r"\b(?:(next|last|this)\s+)?(" + "|".join(_WEEKDAYS) + r")\b", re.IGNORECASE),
        _resolve_weekday,
    ),
]

TIME_EXP = re.compile(
    r"\b(?:at\s+)?(?:(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b|(\d{1,2}):(\d{2})\b|(noon|midnight)\b)",
    re.IGNORECASE,
)


def _time_of_day(match: re.Match) -> Optional[Tuple[int, int]]:
    """Hour and minute named by a TIME_EXP match, or None if out of range."""
    hour12, minute12, meridiem, hour24, minute24, word = match.groups()
    if word:
        return (12, 0) if word.lower() == "noon" else (0, 0)
    if meridiem:
        hour, minute = int(hour12), int(minute12 or 0)
        if not 1 <= hour <= 12 or minute > 59:
            return None
        hour = hour % 12 + (12 if meridiem.lower() == "pm" else 0)
        return hour, minute
    hour, minute = int(hour24), int(minute24)
    if hour > 23 or minute > 59:
        return None
    return hour, minute


class DefaultEntityRecognizer(EntityRecognizerInterface):
    """Default implementation of entity recognition functionality."""

    def parse_number(self, text: str) -> float:
        entity = self.recognize_number(text)
        return float(entity.value) if entity else math.nan

    def recognize_number(self, text: str) -> Optional[NumberEntity]:
        match = NUMBER_EXP.search(text or "")
        if not match:
            return None
        token = match.group(0)
        value = float(token) if "." in token else int(token)
        return NumberEntity(
            entity=token,
            value=value,
            start_index=match.start(),
            end_index=match.end(),
        )

    def parse_boolean(self, text: str) -> Optional[bool]:
        text = (text or "").strip()
        if YES_EXP.search(text):
            return True
        if NO_EXP.search(text):
            return False
        return None

    def find_all_matches(
        self, choices: ChoiceSource, utterance: str, threshold: float = 0.6
    ) -> List[ChoiceMatch]:
        """Score every choice against the utterance.

        A choice containing the utterance scores by how much of it is covered, an
        utterance containing the choice scores between 0.5 and 0.9, and otherwise the
        better of token overlap and a character similarity ratio is used.
        """
        matches: List[ChoiceMatch] = []
        utterance = (utterance or "").strip().lower()
        if not utterance:
            return matches
        tokens = utterance.split()

        for index, choice in enumerate(self.expand_choices(choices)):
            value = choice.strip().lower()
            if not value:
                continue
            if utterance in value:
                score = len(utterance) / len(value)
            elif value in utterance:
                score = min(0.5 + len(value) / len(utterance), 0.9)
            else:
                matched = "".join(token for token in tokens if token in value)
                score = max(
                    len(matched) / len(value),
                    SequenceMatcher(None, utterance, value).ratio(),
                )
            if score > threshold:
                matches.append(ChoiceMatch(index=index, entity=choice, score=score))
        return matches

    def find_best_match(
        self, choices: ChoiceSource, utterance: str, threshold: float = 0.6
    ) -> Optional[ChoiceMatch]:
        matches = self.find_all_matches(choices, utterance, threshold)
        if not matches:
            return None
        return max(matches, key=lambda m: m.score)

    def recognize_time(
        self, text: str, ref_date: Optional[datetime] = None
    ) -> Optional[TimeEntity]:
        """Find the first date and/or time of day in text and resolve it against ref_date."""
        ref = ref_date or datetime.now()
        text = text or ""

        date_match: Optional[re.Match] = None
        resolved: Optional[_DateResolution] = None
        for pattern, resolver in _DATE_PATTERNS:
            match = pattern.search(text)
            if not match or (date_match and match.start() >= date_match.start()):
                continue
            try:
                resolved = resolver(match, ref)
            except ValueError:
                logger.debug("Ignoring invalid date expression '%s'", match.group(0))
                continue
            date_match = match

        time_match: Optional[re.Match] = None
        time_of_day: Optional[Tuple[int, int]] = None
        for match in TIME_EXP.finditer(text):
            if date_match and date_match.start() <= match.start() < date_match.end():
                continue
            time_of_day = _time_of_day(match)
            if time_of_day:
                time_match = match
                break

        if resolved is None and time_of_day is None:
            return None

        start, has_time = resolved if resolved else (ref, False)
        if time_of_day and not has_time:
            start = start.replace(hour=time_of_day[0], minute=time_of_day[1], second=0, microsecond=0)
        else:
            time_match = None

        spans = [m.span() for m in (date_match, time_match) if m is not None]
        start_index = min(s for s, _ in spans)
        end_index = max(e for _, e in spans)
        return TimeEntity(
            entity=text[start_index:end_index],
            start_index=start_index,
            end_index=end_index,
            resolution=TimeResolution(start=start, ref=ref),
        )

    def expand_choices(self, choices: ChoiceSource) -> List[str]:
        if choices is None:
            return []
        if isinstance(choices, str):
            return [c.strip() for c in choices.split("|") if c.strip()]
        if hasattr(choices, "keys"):
            return [str(key) for key in choices.keys()]
        return [str(choice) for choice in choices]
