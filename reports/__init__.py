"""Генерация отчетов"""
from .generator import ReportGenerator, build_summary, build_title
from .narrative import NarrativeClient, build_prompt, fallback_analysis

__all__ = [
    'ReportGenerator',
    'build_summary',
    'build_title',
    'NarrativeClient',
    'build_prompt',
    'fallback_analysis'
]
