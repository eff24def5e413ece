# Import all fixtures
from tests.fixtures.verifiers import *  # noqa: F403
