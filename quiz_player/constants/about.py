"""Static metadata describing QuizPlayer."""

APP_NAME = "QuizPlayer"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "QuizPlayer walks you through categorized multiple-choice quizzes one question at a time. "
    "Pick a quiz, answer each question, and review the explanations before seeing your score."
)

HELP_TEXT = (
    "Quizzes are listed in quiz-list.json, grouped by category:\n\n"
    '[{"category": "Maths", "quizzes": [{"file": "maths/basics.json", "title": "Basics"}]}]\n\n'
    "Each quiz file is either a list of questions or {\"questions\": [...]}. A question looks like:\n\n"
    '{"question": "What is $2 + 2$?", "answerOptions": [\n'
    '  {"text": "3"}, {"text": "4", "isCorrect": true, "rationale": "Two pairs make four."}\n'
    "]}\n\n"
    "A numeric \"answer\" field can be used instead of isCorrect flags."
)
