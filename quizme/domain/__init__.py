"""
Domain modules for QuizMe: quizzes, attempts and explanations.
"""
