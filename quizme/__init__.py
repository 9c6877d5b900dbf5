"""
QuizMe backend.

Quiz authoring, quiz attempts with normalized answer scoring, attempt history,
review reconstruction and AI generated explanations of answers.
"""

__version__ = "1.0.0"
