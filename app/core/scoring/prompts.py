"""
Prompts for AI evaluation of written answers.
"""

# The judge must answer in plain text, two lines, so the response can be parsed with regexes
WRITTEN_ANSWER_EVALUATION_PROMPT = """You are an exam evaluator. Evaluate the following answer for the question. Give a score (0-100) and a short, polite, constructive feedback (no JSON, no harsh language, just plain text).
Question: {question_text}
Answer: {answer_text}
Criteria: relevance, completeness, clarity, grammar.
Respond in this format: 'Score: <number>
Feedback: <your feedback here>'"""
