"""Conjunctive criteria over captured records, and the ``recorded`` matcher.

Each criterion is a small tagged value (level, message or cause). A query
holds when a single captured record satisfies every supplied criterion;
partial matches on different records never add up to a match.

``recorded`` returns a hamcrest matcher, so it composes with ``not_``,
``all_of`` and friends and plugs into ``hamcrest.assert_that``.
"""

import re
from dataclasses import dataclass

from hamcrest import equal_to, instance_of, matches_regexp
from hamcrest.core.base_matcher import BaseMatcher
from hamcrest.core.description import Description
from hamcrest.core.matcher import Matcher
from hamcrest.core.string_description import StringDescription

from log_recorder.levels import level_name, resolve_level
from log_recorder.models import CapturedRecord


@dataclass(frozen=True)
class LevelCriterion:
    level: int

    def matches(self, record: CapturedRecord) -> bool:
        return record.level == self.level

    def describe(self) -> str:
        return f'with level "{level_name(self.level)}"'


@dataclass(frozen=True)
class MessageCriterion:
    matcher: Matcher

    def matches(self, record: CapturedRecord) -> bool:
        return self.matcher.matches(record.message)

    def describe(self) -> str:
        return f"with a message matching {_describe(self.matcher)}"


@dataclass(frozen=True)
class CauseCriterion:
    matcher: Matcher

    def matches(self, record: CapturedRecord) -> bool:
        return self.matcher.matches(record.cause)

    def describe(self) -> str:
        return f"with a cause matching {_describe(self.matcher)}"


Criterion = LevelCriterion | MessageCriterion | CauseCriterion


def _describe(matcher: Matcher) -> str:
    return str(StringDescription().append_description_of(matcher))


def _message_matcher(message) -> Matcher:
    if isinstance(message, Matcher):
        return message
    if isinstance(message, str):
        return equal_to(message)
    if isinstance(message, re.Pattern):
        return matches_regexp(message)
    raise TypeError(f"Unsupported message criterion: {message!r}")


def _cause_matcher(cause) -> Matcher:
    if isinstance(cause, Matcher):
        return cause
    if isinstance(cause, type) and issubclass(cause, BaseException):
        return instance_of(cause)
    raise TypeError(f"Unsupported cause criterion: {cause!r}")


def _is_level(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    if isinstance(value, str):
        try:
            resolve_level(value)
        except ValueError:
            return False
        return True
    return False


def build_criteria(level=None, message=None, cause=None) -> list[Criterion]:
    """Turn the supplied arguments into criteria, skipping those left as None."""
    criteria: list[Criterion] = []
    if level is not None:
        criteria.append(LevelCriterion(resolve_level(level)))
    if message is not None:
        criteria.append(MessageCriterion(_message_matcher(message)))
    if cause is not None:
        criteria.append(CauseCriterion(_cause_matcher(cause)))
    return criteria


def record_matches(record: CapturedRecord, criteria: list[Criterion]) -> bool:
    """True if this one record satisfies every criterion."""
    return all(c.matches(record) for c in criteria)


def describe_records(records: list[CapturedRecord]) -> str:
    return "<" + ",".join(str(r) for r in records) + ">"


class RecordedMatcher(BaseMatcher):
    """Matches a recorder holding at least one record that meets all criteria."""

    def __init__(self, criteria: list[Criterion]):
        self._criteria = list(criteria)

    @property
    def criteria(self) -> list[Criterion]:
        return list(self._criteria)

    def _matches(self, item) -> bool:
        get_records = getattr(item, "get_records", None)
        if get_records is None:
            return False
        return any(record_matches(r, self._criteria) for r in get_records())

    def describe_to(self, description: Description):
        description.append_text(
            " ".join(["has LogRecord"] + [c.describe() for c in self._criteria])
        )

    def describe_mismatch(self, item, mismatch_description: Description):
        get_records = getattr(item, "get_records", None)
        if get_records is None:
            mismatch_description.append_text("was ").append_description_of(item)
            return
        mismatch_description.append_text(f"was {describe_records(get_records())}")


def recorded(level=None, message=None, cause=None) -> RecordedMatcher:
    """Build a deferred matcher for a recorder.

    ``level`` is a level name or number compared for equality; ``message`` a
    string (exact), a compiled pattern or a hamcrest matcher; ``cause`` an
    exception class or a hamcrest matcher.

    The level may be left out positionally: ``recorded("done")`` and
    ``recorded(equal_to("done"), instance_of(OSError))`` treat their
    arguments as message and cause. A bare string that names a level is
    still read as a level; pass ``message=`` for such messages.
    """
    if level is not None and not _is_level(level):
        if message is not None and cause is not None:
            raise TypeError("recorded() takes at most a message and a cause after dropping the level")
        level, message, cause = None, level, message if message is not None else cause
    return RecordedMatcher(build_criteria(level, message, cause))
