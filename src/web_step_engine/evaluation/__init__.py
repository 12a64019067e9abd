"""
Evaluation module - Evaluators for expressions embedded in bindings.
"""

from web_step_engine.evaluation.interpolation import interpolate, has_references
from web_step_engine.evaluation.xpath import evaluate_xpath, XMLNodeType
from web_step_engine.evaluation.regex import extract_by_regex
from web_step_engine.evaluation.json_path import evaluate_json_path
from web_step_engine.evaluation.process import run_process
from web_step_engine.evaluation.files import read_file

__all__ = [
    "interpolate",
    "has_references",
    "evaluate_xpath",
    "XMLNodeType",
    "extract_by_regex",
    "evaluate_json_path",
    "run_process",
    "read_file",
]
