"""
Insight service - asks a local Ollama model for a short motivational
insight about the user's current data.

The call is bounded by INSIGHT_TIMEOUT and never raises: any failure is
logged and replaced by FALLBACK_INSIGHT so the dashboard always renders.
"""

import asyncio
import logging

from ollama import AsyncClient

import config
from services import insights

logger = logging.getLogger(__name__)

FALLBACK_INSIGHT = (
    "Continue focado em sua jornada de autocuidado. "
    "Cada pequeno passo conta para sua evolução pessoal."
)

PROMPT_TEMPLATE = """Você é um mentor de bem-estar pessoal e produtividade para o aplicativo "+Cura".
Analise os seguintes dados do usuário "{user_name}" e forneça um insight curto, motivador e prático (máximo 3 frases).

Dados Atuais:
- Tarefas Pendentes: {pending}
- Tarefas Concluídas: {completed}
- Hábitos Ativos: {habits}
- Último Humor: {last_mood}
- Saldo Financeiro: R$ {balance:.2f}

Instruções:
1. Seja empático e profissional.
2. Se houver muitas tarefas pendentes, sugira priorização.
3. Se o humor estiver baixo, sugira um hábito de autocuidado.
4. Se as finanças estiverem negativas, dê uma dica de economia.
5. Use Markdown para formatação leve.
"""


def build_prompt(snapshot: dict) -> str:
    """
    Render the mentor prompt.

    ``snapshot`` holds "tasks", "habits", "mood" (newest first), "finance"
    and "user_name", in the shape returned by the resource services.
    """
    tasks = snapshot.get("tasks", [])
    mood = snapshot.get("mood", [])
    completed = sum(1 for t in tasks if t["completed"])
    return PROMPT_TEMPLATE.format(
        user_name=snapshot.get("user_name") or "Usuário",
        pending=len(tasks) - completed,
        completed=completed,
        habits=len(snapshot.get("habits", [])),
        last_mood=mood[0]["mood"] if mood else "Não registrado",
        balance=insights.finance_balance(snapshot.get("finance", [])),
    )


async def _resolve_model(client: AsyncClient) -> str:
    """Configured model, or the first installed one when set to "auto"."""
    if config.INSIGHT_MODEL and config.INSIGHT_MODEL != "auto":
        return config.INSIGHT_MODEL
    response = await client.list()
    models = [m.model for m in response.models]
    if not models:
        raise RuntimeError("No Ollama models installed")
    return models[0]


async def _request_insight(prompt: str) -> str:
    client = AsyncClient(host=config.OLLAMA_HOST, timeout=config.INSIGHT_TIMEOUT)
    model = await _resolve_model(client)
    response = await client.chat(
        model=model,
        messages=[{"role": "user", "content": prompt}],
    )
    text = (response["message"]["content"] or "").strip()
    if not text:
        raise ValueError("Empty response from model")
    return text


async def get_insight(snapshot: dict) -> str:
    """Return a short insight, or FALLBACK_INSIGHT on any failure."""
    prompt = build_prompt(snapshot)
    try:
        return await asyncio.wait_for(
            _request_insight(prompt), timeout=config.INSIGHT_TIMEOUT
        )
    except asyncio.TimeoutError:
        logger.warning("Insight request timed out after %ss",
                       config.INSIGHT_TIMEOUT)
    except Exception:
        logger.exception("Error getting AI insight")
    return FALLBACK_INSIGHT
