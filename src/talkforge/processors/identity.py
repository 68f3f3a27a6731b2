"""Cross-check a LinkedIn name against a GitHub display name."""

import re

from talkforge.models.speaker import NameComparison, SpeakerProfile

_NON_ALPHA_RE = re.compile(r"[^a-z]")

# Shared tokens this short ("jr", initials) say nothing about identity
MIN_SHARED_TOKEN_LENGTH = 3


def normalize_name(name: str) -> str:
    """Lowercase and keep letters only."""
    return _NON_ALPHA_RE.sub("", name.lower())


def compare_names(linkedin_name: str | None, github_name: str | None) -> NameComparison:
    """Compare two display names, tolerating nicknames and reordering.

    Names match when their letter-only forms are equal or one contains the
    other, or when they share a whitespace-separated token of at least three
    characters (a first or last name). A missing name never contradicts.

    Args:
        linkedin_name: Name recovered from the LinkedIn export.
        github_name: Display name of the GitHub profile.

    Returns:
        NameComparison with a warning naming both sources on mismatch.
    """
    if not linkedin_name or not github_name:
        return NameComparison(match=True)

    linked = normalize_name(linkedin_name)
    git = normalize_name(github_name)

    if linked == git or linked in git or git in linked:
        return NameComparison(match=True)

    linked_parts = linkedin_name.lower().split()
    git_parts = set(github_name.lower().split())
    if any(part in git_parts and len(part) >= MIN_SHARED_TOKEN_LENGTH for part in linked_parts):
        return NameComparison(match=True)

    return NameComparison(
        match=False,
        warning=(
            f'GitHub profile name "{github_name}" doesn\'t match LinkedIn name '
            f'"{linkedin_name}". Please verify you\'re using the correct accounts.'
        ),
    )


def compare_profile(profile: SpeakerProfile) -> NameComparison:
    """Compare the two names held by a speaker profile."""
    return compare_names(profile.linkedin_name, profile.github_display_name)
