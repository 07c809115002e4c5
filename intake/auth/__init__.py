"""
Authentication for the intake service:

- bcrypt password hashes (``passwords``)
- signed, time-limited JWT session tokens (``tokens``)
- an injected identity repository (``store``)
- signup/login orchestration (``service``)
"""
