"""
Services module for the photo overlay engine.

Available Services:
- logger: Centralized loguru-backed logging
- overlay_pipeline: Overlay config handling, authoring, placement and compositing
- capture_pipeline: Orientation, eligibility, selection and packaging per capture
"""
