"""Data models for TalkForge."""

from talkforge.models.classification import ClassificationResult, NameCandidate, NameStrategy
from talkforge.models.document import ReconstructedLine, TextFragment
from talkforge.models.github import GitHubData, GitHubProfile, GitHubRepo, GitHubUser
from talkforge.models.speaker import NameComparison, SpeakerProfile
from talkforge.models.state import SpeakerInput, TalkForgeState
from talkforge.models.topics import Topic, TopicsResponse, normalize_topics

__all__ = [
    "ClassificationResult",
    "NameCandidate",
    "NameStrategy",
    "ReconstructedLine",
    "TextFragment",
    "GitHubData",
    "GitHubProfile",
    "GitHubRepo",
    "GitHubUser",
    "NameComparison",
    "SpeakerProfile",
    "SpeakerInput",
    "TalkForgeState",
    "Topic",
    "TopicsResponse",
    "normalize_topics",
]
