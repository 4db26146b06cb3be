"""In-memory stubs for development and tests."""

from wombat.infrastructure.stubs.problem_store_stub import ProblemStoreStub
from wombat.infrastructure.stubs.text_generator_stub import TextGeneratorStub
from wombat.infrastructure.stubs.user_directory_stub import UserDirectoryStub

__all__ = [
    "ProblemStoreStub",
    "TextGeneratorStub",
    "UserDirectoryStub",
]
