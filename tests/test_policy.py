import pytest

from gcloud_mcp.core.policy import (
    CommandPolicy,
    PolicyDecision,
    PolicyList,
    build_allow_matcher,
    build_deny_matcher,
    normalize,
)


def test_normalize_lowercases_strips_and_appends_space():
    assert normalize("  Compute Instances \t\n") == "compute instances "
    assert normalize("") == " "


def test_policy_list_normalizes_once():
    patterns = PolicyList(["STORAGE  ", " compute"])
    assert patterns.patterns == ("storage ", "compute ")
    assert len(patterns) == 2
    assert PolicyList([]).patterns == ()
    assert not PolicyList([])


# Allowlist

def test_allow_empty_allowlist_matches_everything():
    allowlist = build_allow_matcher([])
    assert allowlist.matches("compute instances list")
    assert allowlist.matches("")


def test_allow_command_on_allowlist():
    allowlist = build_allow_matcher(["compute instances"])
    assert allowlist.matches("compute instances list")


def test_allow_command_not_on_allowlist():
    allowlist = build_allow_matcher(["compute"])
    assert not allowlist.matches("storage buckets list")


def test_allow_multiple_items():
    allowlist = build_allow_matcher(["compute", "storage buckets"])
    assert allowlist.matches("compute instances list")
    assert allowlist.matches("storage buckets list")
    assert not allowlist.matches("storage blobs list")
    assert not allowlist.matches("source repos list")


def test_allow_differentiates_substring_commands():
    allowlist = build_allow_matcher(["app"])
    assert allowlist.matches("app")
    assert allowlist.matches("app deploy")
    assert not allowlist.matches("alpha app deploy")
    assert not allowlist.matches("apphub")
    assert not allowlist.matches("beta apphub")


def test_allow_is_case_and_padding_insensitive():
    allowlist = build_allow_matcher(["STORAGE  \r\n\t   "])
    assert allowlist.matches("storage")
    assert allowlist.matches("Storage")
    assert allowlist.matches("  storAGE ")
    assert not allowlist.matches("compute")


def test_allow_has_no_release_track_expansion():
    allowlist = build_allow_matcher(["compute instances"])
    assert not allowlist.matches("beta compute instances list")


# Denylist

def test_deny_empty_denylist_matches_nothing():
    denylist = build_deny_matcher([])
    assert not denylist.matches("compute instances list")
    assert not denylist.matches("")


def test_deny_command_on_denylist():
    denylist = build_deny_matcher(["compute instances"])
    assert denylist.matches("compute instances list")


def test_deny_command_not_on_denylist():
    denylist = build_deny_matcher(["compute instances"])
    assert not denylist.matches("storage buckets list")


def test_deny_multiple_items():
    denylist = build_deny_matcher(["compute instances", "storage buckets list"])
    assert denylist.matches("compute instances list")
    assert denylist.matches("storage buckets list")
    assert not denylist.matches("storage buckets update")
    assert not denylist.matches("source repos list")


@pytest.mark.parametrize("track", ["", "alpha ", "beta ", "preview "])
def test_deny_ga_pattern_covers_every_release_track(track):
    denylist = build_deny_matcher(["compute instances"])
    assert denylist.matches(f"{track}compute instances list")
    assert not denylist.matches(f"{track}compute networks list")


def test_deny_does_not_match_partial_commands():
    denylist = build_deny_matcher(["compute instances"])
    assert not denylist.matches("compute")
    assert not denylist.matches("compute networks")


def test_deny_whole_release_track():
    denylist = build_deny_matcher(["alpha"])
    assert not denylist.matches("compute")
    assert denylist.matches("alpha compute")
    assert denylist.matches("alpha storage")
    assert not denylist.matches("beta compute")


def test_deny_pre_ga_pattern_only_covers_its_track():
    denylist = build_deny_matcher(["beta ai"])
    assert denylist.matches("beta ai models list")
    assert not denylist.matches("ai models list")
    assert not denylist.matches("alpha ai models list")


def test_deny_differentiates_substring_commands():
    denylist = build_deny_matcher(["app"])
    assert denylist.matches("app")
    assert denylist.matches("app deploy")
    assert denylist.matches("alpha app deploy")
    assert not denylist.matches("apphub")
    assert not denylist.matches("beta apphub")


def test_deny_is_case_and_padding_insensitive():
    denylist = build_deny_matcher(["\t\n\r   STORAGE   "])
    assert denylist.matches("storage")
    assert denylist.matches("Storage")
    assert denylist.matches("  storAGE ")
    assert denylist.matches("ALPHA storage ls")
    assert not denylist.matches("compute")


# Combined policy

def test_policy_allows_when_lists_are_empty():
    policy = CommandPolicy()
    assert policy.evaluate(["compute", "instances", "list"]) is PolicyDecision.ALLOWED


def test_policy_denies_command_missing_from_allowlist():
    policy = CommandPolicy(allowlist=["a b"])
    assert policy.evaluate(["a", "c"]) is PolicyDecision.DENIED_BY_ALLOWLIST


def test_policy_denylist_wins_over_allowlist():
    policy = CommandPolicy(allowlist=["a b"], denylist=["a b"])
    assert policy.evaluate(["a", "b", "c"]) is PolicyDecision.DENIED_BY_DENYLIST


def test_policy_allowlist_is_checked_first():
    policy = CommandPolicy(allowlist=["storage"], denylist=["compute"])
    assert policy.evaluate(["compute", "ssh"]) is PolicyDecision.DENIED_BY_ALLOWLIST


def test_policy_joins_args_with_spaces():
    policy = CommandPolicy(denylist=["compute list"])
    assert policy.evaluate(["compute", "list", "--zone", "eastus1"]) is PolicyDecision.DENIED_BY_DENYLIST
    assert policy.evaluate(["compute", "create"]) is PolicyDecision.ALLOWED


def test_matchers_are_deterministic():
    patterns = ["compute instances", "app"]
    commands = ["compute instances list", "apphub", "beta app deploy", "storage ls"]
    first = [build_deny_matcher(patterns).matches(c) for c in commands]
    matcher = build_deny_matcher(patterns)
    second = [matcher.matches(c) for c in commands]
    third = [matcher.matches(c) for c in commands]
    assert first == second == third == [True, False, True, False]
