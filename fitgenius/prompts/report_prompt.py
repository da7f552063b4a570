"""Detailed training report prompt."""

from langchain_core.prompts import ChatPromptTemplate

REPORT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_prompt}"),
    ("human", """Write a detailed training analysis report from these logs.

User profile: {profile}
Log summary: {logs}

1. An overall score (0-100) and a rating.
2. Rate each 0-100: consistency, exercise variety, progressive overload and
   estimated technique execution.
3. Muscle balance as percentages for push, pull, legs and core.
4. Physiology: which training phase the user is in (neural adaptation,
   hypertrophy, ...) and where they are heading.
5. A short list of recommendations."""),
])
