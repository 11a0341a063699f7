import re
from typing import List

import pytest

from keyphraseminer import KeyphraseCandidateBuilder, Token


_TOKEN_RE = re.compile(r"[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*|[^\sA-Za-z0-9]")


def regex_tokenize(text: str) -> List[Token]:
    """Deterministic stand-in tokenizer: words (hyphens kept) and single marks."""
    return [Token.from_text(piece) for piece in _TOKEN_RE.findall(text)]


@pytest.fixture
def builder() -> KeyphraseCandidateBuilder:
    """Builder with injected collaborators: regex tokenizer, identity stemmer."""
    return KeyphraseCandidateBuilder(tokenize_fn=regex_tokenize, stem_fn=lambda word: word)
