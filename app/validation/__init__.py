"""
Field rules for incoming task and subtask payloads.

Every checker returns a list of FieldError instead of raising, so callers can
report all violations of a payload in one response.
"""
