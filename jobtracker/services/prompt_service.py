"""
Prompt Service

Builds the Gemini prompts for match analysis and interview question
generation. Pure string templating: the section labels in the match
analysis prompt are what `response_parser.parse_match_analysis` looks for.
"""

from typing import Optional

from jobtracker.schemas.analysis import AnalysisMode, AnalysisRequest

DEFAULT_QUESTION_COUNT = 10

MATCH_ANALYSIS_TEMPLATE = """
Analyze the following resume against the job description. Provide exactly these four sections, in this order, using these labels:
1. Match Percentage: the overall fit as a single number, written as "Match Percentage: N%" (e.g., "Match Percentage: 85%").
2. Strengths: A bulleted list of the candidate's relevant skills/experiences found in the resume that match the job description.
3. Missing Skills: A bulleted list of important keywords or skills mentioned in the job description that are NOT clearly present in the resume.
4. Summary: A short (1-2 sentence) summary of the candidate's fit for the role.

Resume Text:
---
{resume_text}
---

Job Description:
---
{job_description}
---

Analysis:
"""

FREE_TEXT_QUESTIONS_TEMPLATE = """
Generate a list of 5-7 personalized interview questions based on the following resume and job description. Focus on verifying the candidate's skills and experience mentioned in the resume as they relate to the job requirements. Output ONLY the numbered list of questions.

Resume Text:
---
{resume_text}
---

Job Description:
---
{job_description}
---

Questions:
"""

STRUCTURED_QUESTIONS_TEMPLATE = """
Based *strictly* on the resume content provided below, generate exactly {count} technical interview questions relevant to the skills and experience listed, along with ideal, concise answers for each. Focus on technical skills, tools, methodologies, and project experiences mentioned. Do not invent skills or experiences not present in the resume.

Resume Content:
---
{resume_text}
---
{job_section}
Format the output *only* as a valid JSON array of objects. Each object must have exactly two keys: "question" (string) and "answer" (string).

Example Format:
[
  {{
    "question": "Can you elaborate on your experience with [Specific Skill/Tool from Resume] as mentioned in [Project or Context from Resume]?",
    "answer": "In [Project or Context], I used [Specific Skill/Tool] to [develop, implement, optimize] [Component/Feature]."
  }}
]

Ensure the entire output is *only* the JSON array of exactly {count} objects, starting with '[' and ending with ']'. Do not include any introductory text, explanations, apologies, or markdown formatting like ```json before or after the array.
"""

JOB_SECTION_TEMPLATE = """
Target Job Description (prioritize questions about resume skills this role needs):
---
{job_description}
---
"""


def compose_prompt(
    mode: AnalysisMode,
    resume_text: str,
    job_description: Optional[str] = None,
    structured: bool = True,
    question_count: int = DEFAULT_QUESTION_COUNT,
) -> str:
    """
    Build the prompt for one analysis.

    Resume text and job description are interpolated verbatim. Callers are
    expected to have validated that a job description is present when the
    mode needs one.
    """
    if mode == AnalysisMode.MATCH_ANALYSIS:
        return MATCH_ANALYSIS_TEMPLATE.format(
            resume_text=resume_text,
            job_description=job_description or "",
        )

    if not structured:
        return FREE_TEXT_QUESTIONS_TEMPLATE.format(
            resume_text=resume_text,
            job_description=job_description or "",
        )

    job_section = ""
    if job_description and job_description.strip():
        job_section = JOB_SECTION_TEMPLATE.format(job_description=job_description)
    return STRUCTURED_QUESTIONS_TEMPLATE.format(
        count=question_count,
        resume_text=resume_text,
        job_section=job_section,
    )


def compose_for_request(request: AnalysisRequest, question_count: int = DEFAULT_QUESTION_COUNT) -> str:
    return compose_prompt(
        request.mode,
        request.resume_text,
        request.job_description,
        structured=request.structured,
        question_count=question_count,
    )
