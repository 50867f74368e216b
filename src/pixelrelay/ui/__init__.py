"""Gradio client for the PixelRelay relay endpoint."""
