from typing import Optional

ANALYSIS_SCHEMA = """{
  "simplified": "A clear, plain English explanation of the document's main points, preserving all important details and legal implications. Break down complex clauses into understandable language.",
  "riskAssessment": {
    "overallRisk": "low/medium/high",
    "riskFactors": [
      {
        "clause": "Specific clause or section",
        "risk": "high/medium/low",
        "explanation": "Why this is risky and what it means for the user",
        "impact": "Financial/Legal/Operational impact description"
      }
    ]
  },
  "keyTerms": [
    {
      "term": "Legal term or phrase",
      "definition": "Simple explanation of what this means",
      "importance": "Why this term matters"
    }
  ],
  "actionItems": [
    {
      "action": "What the user should do",
      "priority": "high/medium/low",
      "deadline": "When this should be done (if applicable)"
    }
  ],
  "warnings": [
    "Important warnings or red flags the user should be aware of"
  ]
}"""

ANALYSIS_GUIDELINES = """Important guidelines:
1. Focus on making complex legal language accessible to non-lawyers
2. Highlight potential risks and their real-world implications
3. Identify terms that could be problematic or unfair
4. Provide actionable advice where appropriate
5. Be objective but help users understand what they're agreeing to
6. If analyzing a specific question, prioritize that in your response"""

LEGAL_ANALYSIS_PROMPT = """You are an expert legal document analyst. Analyze the following legal text and provide a comprehensive breakdown.

LEGAL TEXT:
"{text}"

{question}

Please provide a detailed analysis in the following JSON format:

{schema}

{guidelines}

Respond ONLY with valid JSON - no additional text or formatting."""


def build_legal_analysis_prompt(text: str, query: Optional[str] = None) -> str:
    """
    Build the analysis prompt sent to the LLM.

    The text and query are embedded literally. Same inputs always give the
    same prompt.
    """
    question = f'SPECIFIC QUESTION: "{query}"' if query else ""
    return LEGAL_ANALYSIS_PROMPT.format(
        text=text,
        question=question,
        schema=ANALYSIS_SCHEMA,
        guidelines=ANALYSIS_GUIDELINES,
    )
