"""
Command admission control for the run_gcloud_command tool.

Commands are matched against allowlist/denylist patterns as whole-word
prefixes. Denylist patterns are expanded across gcloud release tracks.
"""
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

# GA has no prefix.
RELEASE_TRACKS = ("", "alpha ", "beta ", "preview ")


def normalize(s: str) -> str:
    """
    Normalize a command or pattern for comparison.

    The trailing space keeps "app" from matching "apphub": a pattern can
    only match up to the end of a token.
    """
    return s.lower().strip() + " "


class PolicyDecision(str, Enum):
    """Outcome of evaluating a command against the configured lists."""
    ALLOWED = "allowed"
    DENIED_BY_ALLOWLIST = "denied_by_allowlist"
    DENIED_BY_DENYLIST = "denied_by_denylist"


class PolicyList:
    """Immutable list of normalized command prefixes."""

    __slots__ = ("_patterns",)

    def __init__(self, patterns: Iterable[str] = ()):
        self._patterns: Tuple[str, ...] = tuple(normalize(p) for p in patterns)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    def __len__(self) -> int:
        return len(self._patterns)

    def __iter__(self):
        return iter(self._patterns)

    def __bool__(self) -> bool:
        return bool(self._patterns)

    def __repr__(self) -> str:
        return f"PolicyList({list(self._patterns)!r})"

    def match_prefix(self, command: str) -> bool:
        cmd = normalize(command)
        return any(cmd.startswith(p) for p in self._patterns)


class AllowMatcher:
    """Matches commands on the allowlist. An empty allowlist allows everything."""

    def __init__(self, allowlist: Sequence[str] = ()):
        self.patterns = PolicyList(allowlist)

    def matches(self, command: str) -> bool:
        if not self.patterns:
            return True
        return self.patterns.match_prefix(command)


class DenyMatcher:
    """
    Matches commands on the denylist.

    Denying a GA command denies it on every release track. Denying a
    pre-GA command (e.g. "alpha compute") only denies that track.
    """

    def __init__(self, denylist: Sequence[str] = ()):
        self.patterns = PolicyList(
            track + pattern.strip() for pattern in denylist for track in RELEASE_TRACKS
        )

    def matches(self, command: str) -> bool:
        if not self.patterns:
            return False
        return self.patterns.match_prefix(command)


def build_allow_matcher(allowlist: Sequence[str] = ()) -> AllowMatcher:
    return AllowMatcher(allowlist)


def build_deny_matcher(denylist: Sequence[str] = ()) -> DenyMatcher:
    return DenyMatcher(denylist)


class CommandPolicy:
    """
    Allowlist and denylist for a gcloud tool, built once at startup.

    A command must pass the allowlist and then not be on the denylist;
    when a command is on both, the denylist wins.
    """

    def __init__(self, allowlist: Sequence[str] = (), denylist: Sequence[str] = ()):
        self.allow = build_allow_matcher(allowlist)
        self.deny = build_deny_matcher(denylist)

    @staticmethod
    def command_string(args: List[str]) -> str:
        return " ".join(args)

    def evaluate(self, args: List[str]) -> PolicyDecision:
        """
        Decide whether `gcloud <args>` may run.

        Args:
            args: The argument vector passed to gcloud

        Returns:
            PolicyDecision: ALLOWED, DENIED_BY_ALLOWLIST or DENIED_BY_DENYLIST
        """
        command = self.command_string(args)
        if not self.allow.matches(command):
            return PolicyDecision.DENIED_BY_ALLOWLIST
        if self.deny.matches(command):
            return PolicyDecision.DENIED_BY_DENYLIST
        return PolicyDecision.ALLOWED
