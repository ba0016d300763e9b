"""
Job application tracker backend.

FastAPI service for tracking job postings, scoring resumes against job
descriptions and generating interview questions with Google Gemini.
"""
