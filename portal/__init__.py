"""
Executive Search Candidate Portal backend.

Core components:
- wizard: multi-step job application flow
- stores: profile, document, job catalog and application stores
- api: FastAPI app for jobs, applications and the candidate account
- models: shared data models
"""
