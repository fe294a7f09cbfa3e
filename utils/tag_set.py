from typing import Iterable, List


def merge_tags(existing_tags: Iterable[str], new_tags: Iterable[str]) -> List[str]:
    """
    Merge newly submitted tags into a user's tag list.

    Existing tags keep their order; each new tag is appended the first time it
    is seen (exact, case-sensitive match). Neither input is modified.
    """
    merged = list(existing_tags)
    seen = set(merged)

    for tag in new_tags:
        if tag not in seen:
            merged.append(tag)
            seen.add(tag)

    return merged
