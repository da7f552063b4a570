"""Single exercise technique prompt."""

from langchain_core.prompts import ChatPromptTemplate

INSIGHT_PROMPT = ChatPromptTemplate.from_messages([
    ("system", "{system_prompt}"),
    ("human", """Give a professional technical analysis of the exercise "{exercise_name}":
1. Target muscles.
2. Four or five key technique points for perfect form.
3. The physiological principle: how the movement drives strength or
   muscle growth."""),
])
