"""Formal pipeline invariants.

This file documents what each stage MUST produce. Use it as a reviewer
anchor and system reference.
"""

PIPELINE_INVARIANTS = {
    "manifest": [
        "Every non-empty line has exactly 3 tokens: path_a path_b scalar",
        "scalar parses as a float",
        "A malformed manifest produces no records and no store writes",
    ],

    "order": [
        "Final order is computed once (after optional shuffle) and never re-derived",
        "Indices are 0..N-1 in final order",
        "Keys are zero_pad(index, width) + sep + path_a + sep + path_b",
        "N <= 10**width, checked before any store is opened",
    ],

    "label_store": [
        "One LabelPayload per record (unless orphan_labels=drop and the image failed)",
        "label == index, param == key, float_data == [scalar]",
    ],

    "image_store": [
        "At most one ImagePayload per record, under the same key as its label",
        "label == index, param == key",
        "With check_size: len(data) == channels*height*width of the first payload",
    ],

    "writer": [
        "Commit after every batch_size puts",
        "Exactly one final commit for a non-empty partial batch",
        "A batch pending when an error is raised is never committed",
    ],
}

# Which stages are optional vs required
STAGE_REQUIREMENTS = {
    "manifest": "REQUIRED",
    "shuffle": "OPTIONAL",
    "order": "REQUIRED",
    "label_store": "REQUIRED",
    "image_store": "REQUIRED",
    "writer": "REQUIRED",
    "size_check": "OPTIONAL",
    "verify": "OPTIONAL",
}
