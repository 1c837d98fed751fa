"""
Bodhi Feedback Notifier

Tells a Fedora desktop user which updates in updates-testing touch their
installed packages and still need their feedback, skipping updates they
submitted or already commented on.
"""

__version__ = "0.1.0"
__author__ = "Bodhi Feedback Notifier Team"
