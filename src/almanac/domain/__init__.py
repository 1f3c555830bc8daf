"""Domain layer — ranges, rules, stages, and the remapping pipeline.

This layer depends only on the stdlib.
It must never import from services, commands, config, or output.
"""
