"""Weekly plan generation prompt."""

from langchain_core.prompts import ChatPromptTemplate

PLAN_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_prompt}"),
    ("human", """Create a realistic 7-day training plan for this user:
- Age: {age}
- Weight: {weight} kg
- Height: {height} cm
- Goal: {goal}
- Level: {fitness_level}

Each day needs a focus, concrete exercise names with suggested sets and reps,
an expected duration in minutes and short coaching notes."""),
])
