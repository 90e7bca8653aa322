"""Core compression pipeline: text transforms, dedup, tagging, VRD encoding and chunking."""
