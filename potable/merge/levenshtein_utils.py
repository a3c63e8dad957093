def levenshtein(source: str, target: str) -> int:
    """Computes the Levenshtein
    (https://en.wikipedia.org/wiki/Levenshtein_distance)
    distance between two strings using the Wagner-Fischer algorithm
    (https://en.wikipedia.org/wiki/Wagner%E2%80%93Fischer_algorithm).

    Only two rows of the distance matrix are kept: the distances from the
    previous source prefix to every target prefix, and the row being filled.
    """
    if len(source) < len(target):
        source, target = target, source

    # transforming the empty source prefix into each target prefix takes
    # one insertion per character
    previous = list(range(len(target) + 1))
    for i, s_char in enumerate(source, start=1):
        current = [i]
        for j, t_char in enumerate(target, start=1):
            del_dist = previous[j] + 1
            ins_dist = current[j - 1] + 1
            sub_dist = previous[j - 1] + (s_char != t_char)
            current.append(min(del_dist, ins_dist, sub_dist))
        previous = current

    return previous[len(target)]


def levenshtein_norm(source: str, target: str) -> float:
    """Calculates the normalized Levenshtein distance between two strings.
    The result is a float in the range [0.0, 1.0], with 1.0 signifying the
    biggest possible distance between strings with these lengths. Two empty
    strings are at distance 0.0.
    """
    longest = max(len(source), len(target))
    if longest == 0:
        return 0.0
    return levenshtein(source, target) / longest


def similarity(source: str, target: str) -> float:
    """
    Edit similarity of two strings: ``1 - distance / max(len)``. Equal
    strings score 1.0; strings sharing no aligned character score 0.0.
    """
    return 1.0 - levenshtein_norm(source, target)


def similarity_upper_bound(source: str, target: str) -> float:
    # the distance is at least the difference in length
    longest = max(len(source), len(target))
    if longest == 0:
        return 1.0
    return 1.0 - abs(len(source) - len(target)) / longest
