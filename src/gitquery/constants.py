"""Report formats and fixed values shared by the decoders.

The templates below are the contract with whatever runs git: each decoder
expects the output of exactly the arguments listed here.
"""

from __future__ import annotations

# =============================================================================
# Identifiers
# =============================================================================

#: Length of the abbreviated display form of an identifier
SHORT_HASH_LENGTH: int = 7

#: Placeholder identifier for branch lines that carry no hash column
ZERO_HASH: str = "0" * 40

# =============================================================================
# Status
# =============================================================================

#: Arguments producing porcelain v1 status lines
STATUS_ARGS: tuple[str, ...] = ("status", "--porcelain")

#: Offset of the path within a porcelain status line ("XY path")
STATUS_PATH_OFFSET: int = 3

#: Separator between source and destination path of a rename/copy line
STATUS_RENAME_SEPARATOR: str = " -> "

# =============================================================================
# Log
# =============================================================================

#: Field separator used by LOG_FORMAT (not escaped by git)
LOG_FIELD_DELIMITER: str = "|"

#: hash|author name|author email|author time|committer name|committer email|
#: committer time|parents|subject|body
LOG_FORMAT: str = "--pretty=format:%H|%an|%ae|%at|%cn|%ce|%ct|%P|%s|%b"

#: Maximum number of fields a log line is split into; the body is never re-split
LOG_MAX_FIELDS: int = 10

#: Minimum number of fields for a log line to be decoded
LOG_MIN_FIELDS: int = 9

#: Arguments producing the per-file stat block of a single commit
SHOW_STAT_ARGS: tuple[str, ...] = ("show", "--stat", "--format=")

# =============================================================================
# Refs
# =============================================================================

#: Arguments producing one branch per line with upstream annotations
BRANCH_ARGS: tuple[str, ...] = ("branch", "-vv", "--all")

#: Prefix git prints before remote-tracking branch names in BRANCH_ARGS output
REMOTE_BRANCH_PREFIX: str = "remotes/"

#: Marker of the checked-out branch
CURRENT_BRANCH_MARKER: str = "*"

#: Field separator used by TAG_FORMAT
TAG_FIELD_DELIMITER: str = "|"

#: refname|objecttype|objectname|*objectname|taggername|taggeremail|
#: taggerdate|subject|body
TAG_FORMAT: str = (
    "--format=%(refname:short)|%(objecttype)|%(objectname)|%(*objectname)"
    "|%(taggername)|%(taggeremail)|%(taggerdate:unix)|%(subject)|%(body)"
)

#: Number of columns in a TAG_FORMAT line
TAG_FIELD_COUNT: int = 9

#: Object type reported for annotated tag objects
ANNOTATED_TAG_OBJECT_TYPE: str = "tag"

# =============================================================================
# Stash
# =============================================================================

#: ref-slot hash commit-time reflog-subject
STASH_FORMAT: str = "--format=%gd %H %ct %gs"

#: Number of space-separated parts in a STASH_FORMAT line
STASH_FIELD_COUNT: int = 4

#: Branch-label prefixes written by `git stash push -m` and plain `git stash`
STASH_BRANCH_PREFIXES: tuple[str, ...] = ("On ", "WIP on ")

#: Branch reported when no prefix matches
UNKNOWN_BRANCH: str = "unknown"

# =============================================================================
# Diff
# =============================================================================

#: Column separator of `--stat` per-file lines
STAT_COLUMN_SEPARATOR: str = " | "
