# functions/utils/labels.py
"""Fixed French UI labels shared by every template and notice."""

from __future__ import annotations

SECTION_LABELS: dict[str, str] = {
    "experience": "Expérience",
    "experience_long": "Expérience Professionnelle",
    "experiences": "Expériences",
    "education": "Formation",
    "skills": "Compétences",
    "key_skills": "Compétences Clés",
    "summary": "Profil",
    "contact": "Contact",
}

NAME_PLACEHOLDER = "Votre Nom"
JOB_TITLE_PLACEHOLDER = "Titre du poste"

# Notices raised by the editor session
NOTICES: dict[str, str] = {
    "summary_needs_job_title": "Veuillez d'abord renseigner un titre de poste.",
    "experience_needs_text": "Veuillez renseigner le poste et une description avant d'améliorer le texte.",
    "design_needs_prompt": "Décrivez le style souhaité avant de générer un design.",
    "summary_failed": "Erreur lors de la génération du résumé. Vérifiez la configuration du service.",
    "experience_failed": "Erreur lors de l'amélioration du texte.",
    "design_failed": "Erreur lors de la génération du design. Veuillez réessayer.",
    "rate_limited": "Quota du service IA atteint. Merci de réessayer dans quelques instants.",
}


def section_label(key: str) -> str:
    return SECTION_LABELS.get(key, key.replace("_", " ").title())


def display_or_placeholder(value: str, placeholder: str) -> str:
    """Static templates print a placeholder instead of a blank name/title."""
    return value if value and value.strip() else placeholder
