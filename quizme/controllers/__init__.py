"""
HTTP controllers for quizzes, attempts and explanations.
"""
