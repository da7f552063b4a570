"""Recent-history analysis prompt."""

from langchain_core.prompts import ChatPromptTemplate

ADVICE_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_prompt}"),
    ("human", """Analyze this user's recent training logs. Their goal is "{goal}"
and their level is {fitness_level}.

Log summary: {logs}

Give constructive feedback: what the pattern does well, what it lacks, and
one concrete step for the next session."""),
])
