"""
Reply messages sent to the pairing service.

Stream names and the consumer group are deployment settings and live
in ``question_service.config``.
"""

MSG_FOUND = "Question found successfully."
MSG_NOT_FOUND = "No questions found matching the criteria."
MSG_INTERNAL_ERROR = "An internal error occurred in the Question Service."
