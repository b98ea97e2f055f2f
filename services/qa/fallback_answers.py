"""Canned answers used when no answering service responds."""

from __future__ import annotations

from typing import Dict, Tuple

KNOWN_ANSWERS: Dict[str, str] = {
	"What is the main topic of this document?": (
		"The main topic of this document is an in-depth analysis of the subject matter discussed."
	),
	"Can you summarize the key points?": (
		"The key points include a comprehensive overview, supporting data, and the final conclusions drawn by the authors."
	),
	"What are the conclusions?": (
		"The document concludes that the findings support the initial hypothesis and suggest further research is needed."
	),
	"Who are the main authors mentioned?": "The main authors mentioned are Dr. Smith, Prof. Johnson, and Dr. Lee.",
	"What data or statistics are presented?": (
		"The document presents several statistics, including a 25% increase over the last year "
		"and survey results from 500 participants."
	),
}

# Order matters: tier-2 selection indexes into this tuple.
GENERIC_ANSWERS: Tuple[str, ...] = (
	"This document provides valuable insights and detailed analysis on the topic.",
	"The authors have presented their arguments with supporting evidence throughout the document.",
	"Key findings are highlighted in the summary section towards the end.",
	"Several data points and case studies are discussed to support the conclusions.",
	"The document emphasizes the importance of continued research in this area.",
)

SUGGESTED_QUESTIONS: Tuple[str, ...] = tuple(KNOWN_ANSWERS)

PLACEHOLDER_DOCUMENT_ID = "dummy-document-id"
