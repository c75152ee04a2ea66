"""
Prompt loader utility for managing LLM prompts from JSON files.
Centralized prompt management for easier maintenance and updates.
"""
import json
from pathlib import Path
from typing import Dict, Any, Optional, Union, List
import logging
from langchain_core.prompts import PromptTemplate

logger = logging.getLogger(__name__)


def _join_lines(value: Union[str, List[str]]) -> str:
    return "\n".join(value) if isinstance(value, list) else value


class PromptLoader:
    """Loads and manages prompts from JSON files."""

    def __init__(self, prompts_dir: Optional[Path] = None):
        """Initialize the prompt loader."""
        self.prompts_dir = prompts_dir or Path(__file__).parent.parent / "prompts"
        self._cache: Dict[str, Dict[str, Any]] = {}

    def _load_prompt_file(self, filename: str) -> Dict[str, Any]:
        """
        Load a prompt JSON file.

        Args:
            filename: Name of the JSON file (without .json extension)

        Returns:
            Dictionary containing prompts
        """
        if filename in self._cache:
            return self._cache[filename]

        filepath = self.prompts_dir / f"{filename}.json"

        with open(filepath, 'r', encoding='utf-8') as f:
            prompts = json.load(f)

        self._cache[filename] = prompts
        return prompts

    def get_llm_prompt(self, prompt_key: str) -> Dict[str, Any]:
        """
        Get an LLM prompt by key.

        Args:
            prompt_key: Key identifying the prompt (e.g., "cocktail_recipe")

        Returns:
            Dictionary with prompt templates

        Raises:
            KeyError: If no prompt is registered under the key
        """
        prompts = self._load_prompt_file("llm_prompts")
        if prompt_key not in prompts:
            logger.error(f"Prompt key '{prompt_key}' not found in llm prompts")
            raise KeyError(prompt_key)
        return prompts[prompt_key]

    def get_system_prompt(self, prompt_key: str) -> str:
        """Get the system message for a prompt, joined into one string."""
        return _join_lines(self.get_llm_prompt(prompt_key).get("system", ""))

    def get_prompt_template(self, prompt_key: str) -> PromptTemplate:
        """
        Get a LangChain PromptTemplate for the user part of a prompt.

        Args:
            prompt_key: Key identifying the prompt

        Returns:
            LangChain PromptTemplate object
        """
        config = self.get_llm_prompt(prompt_key)
        template = config.get("user_template") or config.get("template", "")
        return PromptTemplate.from_template(_join_lines(template))


# Global instance
_prompt_loader: Optional[PromptLoader] = None


def get_prompt_loader() -> PromptLoader:
    """Get or create global PromptLoader instance."""
    global _prompt_loader
    if _prompt_loader is None:
        _prompt_loader = PromptLoader()
    return _prompt_loader
