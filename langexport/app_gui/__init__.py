"""Tkinter desktop shell."""
