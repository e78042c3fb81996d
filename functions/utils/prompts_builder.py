# functions/utils/prompts_builder.py

from __future__ import annotations

from textwrap import dedent

import structlog

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Text prompts (fixed UI language: French)
# ---------------------------------------------------------------------------

SUMMARY_MAX_WORDS = 50


def build_summary_prompt(job_title: str, keywords: str) -> str:
    """Professional summary: third person, at most ~50 words, no heading."""
    prompt = dedent(
        f"""
        Tu es un expert en recrutement. Rédige le résumé professionnel d'un CV, en français.
        Poste visé : {job_title.strip()}
        Contexte : {keywords.strip() or "non précisé"}
        Consignes :
        - troisième personne, ton accrocheur et professionnel ;
        - {SUMMARY_MAX_WORDS} mots maximum ;
        - aucun titre, aucune mise en forme, uniquement le paragraphe.
        """
    ).strip()
    logger.debug("summary_prompt_built", length=len(prompt))
    return prompt


def build_experience_prompt(role: str, description: str) -> str:
    """Rewrite of one experience description with action verbs, text only."""
    prompt = dedent(
        f"""
        Améliore cette description d'expérience de CV pour la rendre percutante :
        verbes d'action, résultats concrets, registre professionnel.
        Rôle : {role.strip()}
        Texte : "{description.strip()}"
        Réponds uniquement avec le texte amélioré, sans commentaire ni introduction.
        """
    ).strip()
    logger.debug("experience_prompt_built", length=len(prompt))
    return prompt


def build_design_prompt(description: str, seed: str) -> str:
    """
    Art-direction prompt for a DesignConfig.

    `seed` is embedded so that identical intents do not converge on identical
    designs; it is not used for caching.
    """
    prompt = dedent(
        f"""
        Tu es directeur artistique. Crée la configuration JSON d'un design de CV pour :
        "{description.strip()}"
        Graine aléatoire : {seed}
        Repères :
        - Tech / développement : monochrome, grille, police monospace.
        - Créatif : asymétrique, couleurs vives, grande typographie.
        - Corporate : classique, serif, aéré.
        Les couleurs doivent être des codes hexadécimaux lisibles entre eux
        (texte sur fond, texte sur couleur d'accent).
        Retourne UNIQUEMENT le JSON conforme au schéma DesignConfig, tous les champs remplis.
        """
    ).strip()
    logger.debug("design_prompt_built", length=len(prompt), seed=seed)
    return prompt


__all__ = [
    "SUMMARY_MAX_WORDS",
    "build_summary_prompt",
    "build_experience_prompt",
    "build_design_prompt",
]
