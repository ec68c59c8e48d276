"""
Health Literacy Translator - Clinical Note Simplification Service

Rewrites clinical shorthand notes into plain-language summaries for
patients, with a next-steps checklist and a readability score.

IMPORTANT: Substitutions are surface text transforms. They are not
reviewed for clinical accuracy.
"""

__version__ = "1.0.0"
__author__ = "Health Literacy Translator Team"
