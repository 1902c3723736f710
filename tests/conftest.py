import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def value_stream():
    """
    Factory: ``value_stream("key = value ...")`` returns a TokenStream
    positioned just after the first ``=``, the way a bound handler sees it.
    """
    from clausewitz_parser.loader import TokenKind, TokenStream

    def make(text: str) -> TokenStream:
        stream = TokenStream(text)
        stream.next_token()
        assert stream.next_token().kind is TokenKind.ASSIGN
        return stream

    return make
