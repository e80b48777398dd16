"""
api/sample_questions.py — built-in mock question bank.

Loaded into a QuestionBank at app start-up; nothing is persisted.
"""

from typing import Dict, List, Optional

from uniwise_cbt.models.question_model import Course, Question


def _q(
    course_id: str,
    n: int,
    year: str,
    content: str,
    options: List[str],
    answer: str,
    explanation: Optional[str] = None,
) -> Question:
    return Question(
        id=f"q-{course_id}-{n}",
        course_id=course_id,
        year=year,
        content=content,
        options=dict(zip("abcd", options)),
        answer=answer,
        explanation=explanation,
    )


SAMPLE_COURSES: List[Course] = [
    Course(id="course-1", code="CSC101", title="Introduction to Computer Science",
           level="100", semester="first"),
    Course(id="course-6", code="GSS101", title="Use of English",
           level="100", semester="first"),
    Course(id="course-7", code="GSS102", title="Philosophy and Logic",
           level="100", semester="second"),
    Course(id="course-8", code="GSS201", title="Peace Studies and Conflict Resolution",
           level="200", semester="first"),
    Course(id="course-9", code="GSS202", title="Entrepreneurial Studies",
           level="200", semester="second"),
]


SAMPLE_QUESTIONS: Dict[str, List[Question]] = {
    "course-1": [
        _q("course-1", 1, "2021", "Which of these is an input device?",
           ["Monitor", "Printer", "Keyboard", "Speaker"], "c"),
        _q("course-1", 2, "2022", "The brain of the computer is the",
           ["RAM", "CPU", "Hard disk", "Motherboard"], "b"),
        _q("course-1", 3, "2023", "One byte is made up of how many bits?",
           ["4", "8", "16", "32"], "b"),
    ],
    "course-6": [
        _q("course-6", 1, "2020", "Choose the word nearest in meaning to 'candid'.",
           ["Frank", "Secretive", "Rude", "Careful"], "a",
           "Candid means truthful and straightforward."),
        _q("course-6", 2, "2020", "Choose the word opposite in meaning to 'scarce'.",
           ["Rare", "Abundant", "Costly", "Hidden"], "b"),
        _q("course-6", 3, "2021", "Neither the students nor the lecturer ___ present.",
           ["were", "are", "was", "have been"], "c",
           "With 'neither...nor' the verb agrees with the nearer subject."),
        _q("course-6", 4, "2021", "Which of these sentences is correctly punctuated?",
           ["Its raining.", "It's raining.", "Its' raining.", "It,s raining."], "b"),
        _q("course-6", 5, "2022", "A group of words with a subject and a finite verb is a",
           ["phrase", "clause", "prefix", "morpheme"], "b"),
        _q("course-6", 6, "2022", "The plural of 'criterion' is",
           ["criterions", "criterias", "criteria", "criterion"], "c"),
        _q("course-6", 7, "2022", "Which word is a conjunction?",
           ["Quickly", "Although", "Beneath", "Happiness"], "b"),
        _q("course-6", 8, "2023", "'To let the cat out of the bag' means to",
           ["reveal a secret", "lose something", "free an animal", "start a quarrel"], "a"),
        _q("course-6", 9, "2023", "Skimming a text is reading it to",
           ["memorise it", "get the general idea", "find spelling errors", "translate it"], "b"),
        _q("course-6", 10, "2023", "Which of these is a compound word?",
           ["Teacher", "Classroom", "Running", "Happily"], "b"),
        _q("course-6", 11, "2024", "The passive form of 'Ada wrote the letter' is",
           ["The letter writes Ada.", "The letter was written by Ada.",
            "Ada was written the letter.", "The letter is writing by Ada."], "b"),
        _q("course-6", 12, "2024", "A summary should be",
           ["longer than the original", "a copy of the introduction",
            "brief and in the reader's own words", "full of examples"], "c"),
    ],
    "course-7": [
        _q("course-7", 1, "2020", "Logic is primarily the study of",
           ["feelings", "correct reasoning", "ancient history", "language sounds"], "b"),
        _q("course-7", 2, "2020", "An argument whose conclusion follows necessarily from its premises is",
           ["inductive", "valid", "fallacious", "emotive"], "b"),
        _q("course-7", 3, "2021", "'Philosophy' literally means",
           ["love of wisdom", "study of gods", "art of speech", "science of numbers"], "a"),
        _q("course-7", 4, "2021", "The branch of philosophy concerned with knowledge is",
           ["ethics", "aesthetics", "epistemology", "metaphysics"], "c"),
        _q("course-7", 5, "2022", "Attacking the person instead of the argument is called",
           ["ad hominem", "straw man", "red herring", "begging the question"], "a"),
        _q("course-7", 6, "2022", "Reasoning from specific cases to a general conclusion is",
           ["deduction", "induction", "contradiction", "tautology"], "b"),
        _q("course-7", 7, "2023", "Who wrote 'The Republic'?",
           ["Aristotle", "Socrates", "Plato", "Descartes"], "c"),
        _q("course-7", 8, "2023", "A statement that is true in every possible case is a",
           ["contingency", "contradiction", "tautology", "premise"], "c"),
        _q("course-7", 9, "2024", "Ethics deals mainly with",
           ["right and wrong conduct", "beauty", "the nature of numbers", "the origin of language"], "a"),
        _q("course-7", 10, "2024", "'I think, therefore I am' is attributed to",
           ["Kant", "Descartes", "Hume", "Locke"], "b"),
    ],
    "course-8": [
        _q("course-8", 1, "2021", "Peace defined as the mere absence of war is",
           ["positive peace", "negative peace", "structural peace", "cultural peace"], "b"),
        _q("course-8", 2, "2021", "Who is associated with the concept of structural violence?",
           ["Johan Galtung", "Karl Marx", "Thomas Hobbes", "John Burton"], "a"),
        _q("course-8", 3, "2022", "A neutral third party who helps disputants reach agreement is a",
           ["judge", "mediator", "prosecutor", "witness"], "b"),
        _q("course-8", 4, "2022", "Which of these is a non-violent conflict management method?",
           ["Negotiation", "Coup", "Insurgency", "Blockade"], "a"),
        _q("course-8", 5, "2023", "Early warning in conflict studies refers to",
           ["military mobilisation", "detecting signs of emerging conflict",
            "signing a treaty", "ending a ceasefire"], "b"),
        _q("course-8", 6, "2023", "Arbitration differs from mediation because the arbitrator",
           ["has no role", "makes a binding decision", "represents one party", "must be a judge"], "b"),
        _q("course-8", 7, "2024", "The ECOWAS monitoring group deployed in Liberia was",
           ["ECOMOG", "UNAMID", "AMISOM", "MONUSCO"], "a"),
        _q("course-8", 8, "2024", "Conflict is best described as",
           ["always violent", "a clash of interests or goals", "only between states", "avoidable in all cases"], "b"),
    ],
    "course-9": [],
}
