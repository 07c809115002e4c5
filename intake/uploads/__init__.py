"""
Upload pipeline: one declarative field schema, the on-disk file receiver,
and the service that composes them for the two upload entry points.
"""
