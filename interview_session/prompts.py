from __future__ import annotations  # Interviewer instructions sent to the provider

from textwrap import dedent

PRIMING_TEMPLATE = dedent(  # First turn of every transcript; embeds both documents
    """
    You are an AI interviewer conducting a job interview.

    Here is information about the candidate's resume:
    {resume}

    Here is the job description the candidate is applying for:
    {job_description}

    Based on the resume and job description, please introduce yourself as the interviewer and ask your first question.
    Keep the introduction brief and professional.
    """
).strip()

NEXT_QUESTION_INSTRUCTION = dedent(
    """
    Based on the candidate's previous answer, please ask the next relevant interview question.
    Make your questions increasingly challenging but relevant to the job description.
    """
).strip()

CLOSING_INSTRUCTION = dedent(
    """
    Based on our conversation so far, please conclude the interview.
    Thank the candidate for their time and let them know that they will receive feedback shortly.
    """
).strip()

FEEDBACK_SECTIONS = (
    "Overall impression",
    "Strengths demonstrated",
    "Areas for improvement",
    "Technical skills assessment",
    "Communication skills assessment",
    "Fit for the role based on the job description",
)


def priming_prompt(resume_text: str, job_description_text: str) -> str:
    return PRIMING_TEMPLATE.format(resume=resume_text.strip(), job_description=job_description_text.strip())


def feedback_instruction() -> str:
    numbered = "\n".join(f"{index}. {section}" for index, section in enumerate(FEEDBACK_SECTIONS, start=1))
    return (
        "Based on the entire interview conversation, please provide comprehensive feedback for the candidate.\n"
        f"Include:\n{numbered}\n\n"
        "Format your response in markdown."
    )


__all__ = [
    "CLOSING_INSTRUCTION",
    "FEEDBACK_SECTIONS",
    "NEXT_QUESTION_INSTRUCTION",
    "PRIMING_TEMPLATE",
    "feedback_instruction",
    "priming_prompt",
]
