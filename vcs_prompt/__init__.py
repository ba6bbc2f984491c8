"""
vcs-prompt: version-control status segment for interactive shell prompts.

summarize() in the summarizer module is the main entry point; the cli
module wraps it for use from PS1/PROMPT definitions.
"""
