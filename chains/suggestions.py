SUGGESTED_QUESTIONS = [
    "What are your strongest technical skills?",
    "Can you summarize your recent work experience?",
    "What are your top 3 projects?",
    "Tell me about a project you are proud of.",
    "How have you used AI or machine learning in your work?",
    "How do you collaborate with cross-functional teams?",
    "Where did you study and what did you focus on?",
    "How can I get in touch?",
]
