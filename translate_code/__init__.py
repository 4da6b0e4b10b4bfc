"""
translate-code: translate the user-visible text of HTML/CSS/JS documents
while leaving the code untouched.
"""

__version__ = "1.0.0"
