"""
Visit history.

Responsibilities:
- Remember which restaurants each anonymous session was sent to.
- Feed the last few visits back into search as exclusions.
- Track reveal state and the user's star rating per visit.
"""
