"""
Client-side custom method bridges.
"""

from acp_extensions.ext.ask_user_question import AskUserQuestionBridge, ExtMethodSender

__all__ = [
    "AskUserQuestionBridge",
    "ExtMethodSender",
]
