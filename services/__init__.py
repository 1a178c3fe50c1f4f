"""
Veo Studio Services

Core services for the video job pipeline:
- video_generation: job submission, polling, progress and error classification
"""
