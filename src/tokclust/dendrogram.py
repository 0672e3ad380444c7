from typing import List, Sequence, Tuple

# Both sides of a merge must have more members than this to be considered.
MIN_FLAGGED_SIZE = 3


def interpret(merges: Sequence[Tuple[int, int]]) -> List[List[int]]:
    """
    Extract significant clusters from the merge sequence returned by cluster().

    Replays the merges, tracking the original members of every cluster. When
    two clusters that are both larger than MIN_FLAGGED_SIZE meet, each side
    smaller than half the number of merges is flagged: big enough to matter,
    not yet the trunk that everything ends up in.

    Args:
        merges: Merge sequence, as (left, right) pairs

    Returns:
        Flagged clusters as lists of original indices, in the order found
    """
    members = [[i] for i in range(len(merges) + 1)]
    threshold = len(merges) // 2
    flagged = []

    for left, right in merges:
        if len(members[left]) > MIN_FLAGGED_SIZE and len(members[right]) > MIN_FLAGGED_SIZE:
            if len(members[left]) < threshold:
                flagged.append(list(members[left]))
            if len(members[right]) < threshold:
                flagged.append(list(members[right]))
        members[left].extend(members[right])

    return flagged
