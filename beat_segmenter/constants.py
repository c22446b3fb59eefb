"""All magic numbers and configuration constants."""

MIN_BEAT_LENGTH = 20                 # chars — shortest beat kept when splitting
MAX_BEATS = 50                       # pages — hard cap on a beat sequence
DIALOGUE_ACTION_MIN_LENGTH = 80      # chars — dialogue+action units longer than this are multi-beat
MULTI_BEAT_SENTENCE_ENDERS = 2       # terminal punctuation runs that mark a unit as multi-beat
MULTI_BEAT_DISTINCT_ENTITIES = 2     # distinct roster entities that mark a unit as multi-beat
ROSTER_SUFFIX = ".roster.json"       # sidecar file next to a story
BEATS_ARTIFACT = "beats.json"
OUTPUT_DIR = "output"
VERSION = "0.1.0"
