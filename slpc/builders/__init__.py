"""Builders for emitted artifacts."""

from .program_builder import ProgramBuilder, generate_program

__all__ = ["ProgramBuilder", "generate_program"]
