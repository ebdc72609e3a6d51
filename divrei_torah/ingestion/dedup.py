"""Passage deduplication for item passage lists."""

import hashlib
from enum import Enum

from divrei_torah.models.item import Passage

TOKEN_LENGTH = 8


class PassageOutcome(str, Enum):
    """What happened to a candidate passage."""

    ACCEPTED = "accepted"
    RENAMED = "renamed"  # id collided, content was new
    EMPTY = "empty"
    DUPLICATE = "duplicate"

    @property
    def accepted(self) -> bool:
        return self in (PassageOutcome.ACCEPTED, PassageOutcome.RENAMED)


def _default_id(item_id: str, passages: list[Passage]) -> str:
    return f"{item_id}_p{len(passages) + 1}"


def synthesize_passage_id(item_id: str, passages: list[Passage], content: str) -> str:
    """Build an id that is unique within ``passages``.

    The token is a digest of the content, lengthened on the rare prefix
    clash, so identical input always yields identical ids.
    """
    taken = {passage.id for passage in passages}
    digest = hashlib.sha1(content.encode("utf-8")).hexdigest()
    base = _default_id(item_id, passages)
    for length in range(TOKEN_LENGTH, len(digest) + 1):
        candidate = f"{base}_{digest[:length]}"
        if candidate not in taken:
            return candidate

    suffix = 2
    while f"{base}_{digest}_{suffix}" in taken:
        suffix += 1
    return f"{base}_{digest}_{suffix}"


def add_passage(
    passages: list[Passage], item_id: str, passage_id: str, content: str
) -> tuple[list[Passage], PassageOutcome]:
    """Append a candidate passage unless it is empty or already present.

    Identical content is a duplicate and is dropped. A clashing id with
    new content is kept under a synthesized id.

    Args:
        passages: The item's passage list, mutated in place.
        item_id: Id of the owning item, used for generated ids.
        passage_id: Candidate id, may be empty.
        content: Candidate text.

    Returns:
        The passage list and the outcome for diagnostics.
    """
    if not content.strip():
        return passages, PassageOutcome.EMPTY

    if any(existing.content == content for existing in passages):
        return passages, PassageOutcome.DUPLICATE

    candidate_id = passage_id or _default_id(item_id, passages)
    if any(existing.id == candidate_id for existing in passages):
        new_id = synthesize_passage_id(item_id, passages, content)
        passages.append(Passage(id=new_id, content=content))
        return passages, PassageOutcome.RENAMED

    passages.append(Passage(id=candidate_id, content=content))
    return passages, PassageOutcome.ACCEPTED


def append_passage(
    passages: list[Passage], item_id: str, passage_id: str, content: str
) -> tuple[list[Passage], PassageOutcome]:
    """Append-only variant used for categories without deduplication.

    Only blank content is dropped; repeated ids and content are kept.
    """
    if not content.strip():
        return passages, PassageOutcome.EMPTY

    passages.append(Passage(id=passage_id or _default_id(item_id, passages), content=content))
    return passages, PassageOutcome.ACCEPTED
