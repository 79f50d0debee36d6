"""Assemblage des textes de la conversation de lecture.

Tous les textes sont des gabarits déterministes; seules les questions d'ouverture sont tirées au
hasard via un `random.Random` injectable (tests reproductibles).

Les trois cartes d'un tirage sont positionnelles:
- 0: fondation / passé
- 1: présent / défi
- 2: guidance / avenir
"""

from __future__ import annotations

import random
import re
from collections.abc import Sequence

from arcana.domain.deep_analysis import percent, perform_deep_analysis
from arcana.domain.errors import InvalidInputError
from arcana.domain.models import (
    AstrologyData,
    BirthData,
    DeepAnalysis,
    EnergySignature,
    ResponseDepth,
    Situation,
    TarotCard,
)

SPREAD_SIZE = 3
MIN_PHRASE_CHARS = 10

INITIAL_QUESTIONS = (
    "What's going on in your life that you could use some perspective on?",
    "What's been on your mind lately that you'd like to explore?",
    "Tell me what's happening in your world right now.",
    "What situation are you dealing with that could use some clarity?",
    "What's the main thing you're thinking about or working through?",
    "What's going on that brought you here for a reading today?",
)

_SENTENCE_SPLIT = re.compile(r"[.!?]+")

# (type, motif de détection, mots-clés de la phrase de détail), évalués dans cet ordre.
SITUATION_RULES: tuple[tuple[str, re.Pattern[str], tuple[str, ...]], ...] = (
    (
        "relationship",
        re.compile(
            r"relationship|partner|dating|boyfriend|girlfriend|husband|wife|marriage|love|romantic"
        ),
        ("relationship", "partner", "dating", "love", "boyfriend", "girlfriend", "husband", "wife"),
    ),
    (
        "work",
        re.compile(r"work|job|career|boss|office|workplace|business|colleague"),
        ("work", "job", "career", "boss", "office", "business"),
    ),
    (
        "family",
        re.compile(r"family|mother|father|mom|dad|parents|sister|brother|children|kids"),
        ("family", "mother", "father", "mom", "dad", "parents"),
    ),
    (
        "decision",
        re.compile(r"decision|choose|decide|choice|should i|what should|which"),
        ("decision", "choose", "decide", "choice", "should"),
    ),
    (
        "change",
        re.compile(r"change|changing|transition|moving|new|different|transform"),
        ("change", "changing", "transition", "moving", "new"),
    ),
    (
        "fear",
        re.compile(r"scared|afraid|worry|worried|anxious|fear|nervous"),
        ("scared", "afraid", "worry", "anxious", "fear"),
    ),
)

# Évalués dans l'ordre: la dernière émotion détectée l'emporte.
EMOTION_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("positive", ("excited", "happy")),
    ("anxious", ("scared", "worried")),
    ("frustrated", ("frustrated", "stuck")),
    ("confused", ("confused", "unclear")),
)

NARRATIVE_SYSTEM = (
    "You are a warm, grounded tarot reader. Speak like a perceptive friend, not a guru. "
    "Refer to the person's actual situation and to the three cards by position "
    "(foundation, present, guidance). Never predict events or give medical, legal or "
    "financial advice. Finish with concrete next steps."
)


def _essence(card: TarotCard) -> str:
    """Premier mot-clé de la carte (à défaut son nom)."""
    return card.keywords[0] if card.keywords else card.name.lower()


def _node_head(node: str) -> str:
    return node.split(" - ")[0]


def _require_spread(cards: Sequence[TarotCard]) -> None:
    if len(cards) < SPREAD_SIZE:
        raise InvalidInputError("cards", len(cards), f"a reading needs {SPREAD_SIZE} cards")


# -------------------- Situation --------------------


def _sentences_containing(text: str, keywords: Sequence[str]) -> str:
    sentences = _SENTENCE_SPLIT.split(text)
    for keyword in keywords:
        found = next((s for s in sentences if keyword in s.lower()), None)
        if found and len(found.strip()) > MIN_PHRASE_CHARS:
            return found.strip()
    return ""


def extract_situation(responses: Sequence[str]) -> Situation:
    """
    Extrait la situation concrète décrite par l'utilisateur.

    - key_phrase: première phrase (> 10 caractères) à la première personne, sinon la première.
    - type/details: première règle de `SITUATION_RULES` qui correspond.
    - emotion: dernière règle de `EMOTION_RULES` qui correspond (défaut "neutral").
    """
    text = " ".join(responses)
    lowered = text.lower()

    sentences = [s for s in _SENTENCE_SPLIT.split(text) if len(s.strip()) > MIN_PHRASE_CHARS]
    key_phrase = ""
    if sentences:
        key_phrase = next(
            (s for s in sentences if any(p in s.lower() for p in ("i ", "my ", "we "))),
            sentences[0],
        )

    situation_type = None
    details = ""
    for kind, pattern, keywords in SITUATION_RULES:
        if pattern.search(lowered):
            situation_type = kind
            details = _sentences_containing(text, keywords)
            break

    emotion = "neutral"
    for label, markers in EMOTION_RULES:
        if any(marker in lowered for marker in markers):
            emotion = label

    return Situation(type=situation_type, details=details, key_phrase=key_phrase, emotion=emotion)


# -------------------- Questions --------------------


def generate_initial_question(rng: random.Random | None = None) -> str:
    """Question d'ouverture tirée au hasard."""
    return (rng or random).choice(INITIAL_QUESTIONS)


_FOLLOW_UPS = {
    "relationship": (
        "So with this relationship thing you mentioned - when you look at the {card}, what "
        "comes up for you? This card often shows up when we need to trust our gut about someone."
    ),
    "work": (
        "About the work situation - the {card} is interesting here. What would it look like if "
        "you approached this from a place of complete self-trust instead of trying to please "
        "everyone?"
    ),
    "decision": (
        "For this decision you're facing, the {card} is asking: what would you choose if you "
        "knew you couldn't make a wrong choice? What feels most true to who you are?"
    ),
    "family": (
        "With your family situation, the {card} often appears when we need to set boundaries "
        "while staying loving. What would that look like for you?"
    ),
    "change": (
        "About the changes happening - the {card} suggests this transition is actually "
        "preparing you for something better. What part of you is excited about what's coming?"
    ),
    "fear": (
        "What you're scared about - the {card} often shows up to remind us that fear and "
        "excitement feel the same in the body. What if this fear is actually anticipation?"
    ),
}


def generate_follow_up_question(cards: Sequence[TarotCard], responses: Sequence[str]) -> str:
    """Relance ancrée sur la carte du présent et la situation décrite."""
    _require_spread(cards)
    situation = extract_situation(responses)
    card = cards[1].name
    if situation.type:
        return _FOLLOW_UPS[situation.type].format(card=card)
    if situation.key_phrase:
        return (
            f'You said "{situation.key_phrase}" - the {card} is asking: what would change if '
            "you completely trusted yourself in this situation?"
        )
    return (
        f"Looking at the {card} and what you shared - what's your gut telling you about this "
        "situation? What feels most true?"
    )


# -------------------- Messages de conversation --------------------


def generate_welcome_message(astro: AstrologyData, rng: random.Random | None = None) -> str:
    """Accueil après la saisie des données de naissance, suivi de la question d'ouverture."""
    theme = astro.evolutionary_theme.split(" - ")[0].lower()
    transit = astro.current_transits[0].lower() if astro.current_transits else "the sky right now"
    return (
        f"Welcome, {astro.sun_sign} soul! I'm immediately picking up your {astro.sun_sign} Sun, "
        f"{astro.moon_sign} Moon, and {astro.rising_sign} Rising energy...\n\n"
        f"Your cosmic blueprint shows {theme} as your primary evolutionary theme, and with "
        f"{astro.galactic_alignment.lower()}, you're here for some serious consciousness work.\n\n"
        f"The current cosmic weather - {transit} - is literally designed to support exactly "
        "what you're going through right now.\n\n"
        f"{generate_initial_question(rng)}"
    )


def generate_card_invitation(
    energy: EnergySignature, depth: ResponseDepth, astro: AstrologyData
) -> str:
    """Invitation au tirage après la première réponse."""
    return (
        f"I can feel the {energy.primary_sign} energy in your response... your soul is ready "
        "for some real clarity.\n\n"
        f"Your {astro.sun_sign} Sun is resonating at {percent(depth.depth)}% depth and "
        f"{percent(depth.authenticity)}% authenticity - this tells me you're ready for "
        "truth, not just comfort.\n\n"
        f"Time to let three cards choose you. Your {astro.moon_sign} Moon knows exactly which "
        "ones are meant for your situation. Trust that first instinct - your "
        f"{astro.rising_sign} Rising is your cosmic antenna."
    )


def generate_card_analysis(
    cards: Sequence[TarotCard], astro: AstrologyData, analysis: DeepAnalysis
) -> str:
    """Présentation du tirage et première lecture positionnelle des cartes."""
    _require_spread(cards)
    past, present, guidance = cards[0], cards[1], cards[2]
    south = _node_head(astro.south_node)
    north = _node_head(astro.north_node)
    theme = astro.evolutionary_theme.split(" - ")[0].lower()
    consciousness = percent(analysis.psychological_profile.consciousness_level)
    synchronicity = percent(analysis.synchronicity_level)
    return (
        f"Perfect... {', '.join(c.name for c in cards)} chose you. Your {astro.sun_sign} energy "
        "is in complete resonance with these frequencies.\n\n"
        f"{past.name} is reflecting your {south} karmic mastery... {present.name} is "
        f"illuminating your current {theme} process... and {guidance.name} is pointing toward "
        f"your {north} soul growth edge.\n\n"
        "**SITUATIONAL CARD ANALYSIS:**\n\n"
        f"{past.name} + your {south} past mastery = This {_essence(past)} energy is exactly "
        "what you've been drawing from to handle your current situation. Your soul already "
        "knows how to navigate this.\n\n"
        f"{present.name} + your present reality = The {_essence(present)} frequency is what's "
        "needed RIGHT NOW for what you're going through. This isn't random - this card is "
        "speaking directly to your current experience.\n\n"
        f"{guidance.name} + your {north} growth edge = This {_essence(guidance)} energy is your "
        "path forward. Instead of trying to control how things unfold, what if you approached "
        f"your situation with complete {_essence(guidance)} trust?\n\n"
        f"**CONSCIOUSNESS ACTIVATION: {consciousness}%**\n"
        f"**SYNCHRONICITY LEVEL: {synchronicity}%**\n\n"
        f"Your {astro.moon_sign} Moon is asking: When you look at these three cards and think "
        "about your actual situation - what's the first insight that hits you? What do these "
        "symbols make you realize about what you're really dealing with?"
    )


# -------------------- Lecture finale --------------------


_SITUATION_RESPONSES = {
    "relationship": (
        "The {card} is really interesting for relationship stuff. This card usually shows up "
        "when you need to trust your own feelings about someone instead of overthinking it. "
        "What's your gut actually telling you about this person or situation? Sometimes we "
        "know the answer but we're scared to admit it to ourselves."
    ),
    "work": (
        "With work situations, the {card} often means you're being called to show up more "
        "authentically. Instead of trying to be what you think they want, what would happen if "
        "you just brought your real self to this? Your authentic energy is actually your "
        "biggest professional asset."
    ),
    "family": (
        "Family stuff is always complex, and the {card} suggests this situation is asking you "
        "to find your own center. You can love your family and still have boundaries. What "
        "would it look like to stay true to yourself while still being loving?"
    ),
    "decision": (
        "For decisions, the {card} is basically saying your intuition already knows the answer. "
        "All that mental back-and-forth is just noise. What choice feels most like you? What "
        "option makes you feel more expansive rather than contracted?"
    ),
    "change": (
        "Change is uncomfortable but the {card} suggests this transition is actually aligning "
        "you with something better. What part of this change feels exciting, even if it's also "
        "scary? Sometimes the universe moves us toward what we need even when we resist it."
    ),
    "fear": (
        "The {card} often appears when we're afraid of something that's actually good for us. "
        "Fear and excitement feel the same in your body - it's just how your mind interprets "
        "the energy. What if this fear is actually anticipation for something amazing?"
    ),
}

_EMOTION_OPENERS = {
    "anxious": (
        "I can feel the anxiety in what you shared. That's totally normal when you're dealing "
        "with something important. "
    ),
    "frustrated": (
        "The frustration you're feeling makes complete sense. Sometimes we get stuck because "
        "we're trying to force something instead of flowing with it. "
    ),
    "confused": (
        "Confusion usually means you're in a growth phase. Your old ways of thinking aren't "
        "working anymore, which means you're evolving. "
    ),
}

_SECOND_STEPS = {
    "relationship": (
        "**Trust your feelings** - Your gut knows if this person is right for you. Stop trying "
        "to convince yourself either way."
    ),
    "work": (
        "**Show up authentically** - Stop trying to be what you think they want. Your real self "
        "is your competitive advantage."
    ),
    "decision": (
        "**Feel into your options** - Which choice makes you feel expansive? Which one "
        "contracts you? Your body knows."
    ),
}


def _technical_energies(
    cards: Sequence[TarotCard], astro: AstrologyData | None, analysis: DeepAnalysis | None
) -> str:
    lines = ["**Technical Energies**", ""]
    if astro is not None:
        lines += [
            f"• Sun: {astro.sun_sign}",
            f"• Moon: {astro.moon_sign}",
            f"• Rising: {astro.rising_sign}",
        ]
        if astro.current_transits:
            lines.append(f"• Current Transit: {astro.current_transits[0]}")
    if len(cards) == SPREAD_SIZE:
        for label, card in zip(("Past", "Present", "Guidance"), cards, strict=True):
            lines.append(f"• {label}: {card.name} ({_essence(card)})")
    else:
        lines += [f"• Card {i}: {card.name} ({_essence(card)})" for i, card in enumerate(cards, 1)]
    if analysis is not None:
        consciousness = percent(analysis.psychological_profile.consciousness_level)
        lines.append(f"• Consciousness: {consciousness}%")
        lines.append(f"• Synchronicity: {percent(analysis.synchronicity_level)}%")
    return "\n".join(lines)


def _card_readings(cards: Sequence[TarotCard], situation: Situation) -> str:
    past, present, guidance = cards[0], cards[1], cards[2]
    kind = situation.type
    if kind:
        foundation = (
            f"For your {kind} situation, this {_essence(past)} energy is what's supporting you. "
            "You've got more strength here than you realize."
        )
        now = (
            f"In your {kind} situation, {_essence(present)} energy is exactly what's needed. "
            "This isn't random - this card chose you because this energy is your answer."
        )
        forward = (
            f"For your {kind} situation, approach it with {_essence(guidance)} energy. Don't "
            "force outcomes - just embody this frequency and let things unfold naturally."
        )
    else:
        foundation = (
            f"This {_essence(past)} energy is your secret strength. It's been building in you "
            "and now it's ready to be used."
        )
        now = (
            f"The {_essence(present)} frequency is what you need to embody right now. Trust "
            "this energy completely."
        )
        forward = (
            f"{_essence(guidance)} is your guidance. When you're not sure what to do, ask "
            f"yourself: what would {_essence(guidance)} energy do here?"
        )
    return "\n\n".join(
        (
            f"**{past.name}** - This is your foundation right now. {foundation}",
            f"**{present.name}** - This is what's happening right now. {now}",
            f"**{guidance.name}** - This is your path forward. {forward}",
        )
    )


def _personal_guidance(situation: Situation, astro: AstrologyData | None) -> str:
    guidance = _EMOTION_OPENERS.get(situation.emotion, "")
    guidance += (
        "The thing about your cards is they're not telling you what to do - they're reflecting "
        "what you already know deep down. "
    )
    if astro is not None:
        guidance += (
            f"Your {astro.sun_sign} energy gives you the strength to handle this authentically. "
        )
    guidance += (
        "Trust your gut. It's been right about everything important in your life, even when "
        "your mind tried to talk you out of it."
    )
    if situation.type:
        guidance += (
            f" With {situation.type} stuff, the answer is usually simpler than we make it. What "
            "feels most true to who you are?"
        )
    return guidance


def _next_steps(situation: Situation, guidance_card: TarotCard) -> str:
    essence = _essence(guidance_card)
    if situation.type:
        second = _SECOND_STEPS.get(
            situation.type,
            "**Take one small authentic action** - What's one tiny step that feels true to who "
            "you are?",
        )
    else:
        second = (
            "**Take one aligned action** - What's one small step that feels authentic to you?"
        )
    steps = (
        f"**Embody {essence} energy** - For the next few days, ask yourself: how would someone "
        f"with strong {essence} energy handle this?",
        second,
        "**Notice what feels expansive vs. contractive** - Your body is always giving you "
        "information about what's right for you.",
        "**Trust the process** - You're exactly where you need to be, even if it doesn't feel "
        "like it right now.",
    )
    numbered = "\n\n".join(f"{i}. {step}" for i, step in enumerate(steps, 1))
    return f"Here's what I'd focus on:\n\n{numbered}"


def generate_reading(
    cards: Sequence[TarotCard],
    responses: Sequence[str],
    birth: BirthData | None,
    astro: AstrologyData | None,
    analysis: DeepAnalysis | None = None,
) -> str:
    """
    Lecture finale (gabarit), en sections Markdown.

    Sections: énergies techniques, situation (si détectée avec détails), lecture des cartes,
    guidance personnelle, prochaines étapes. Sans `analysis`, elle est recalculée.
    """
    _require_spread(cards)
    if analysis is None:
        analysis = perform_deep_analysis(responses, birth, astro, cards)
    situation = extract_situation(responses)

    blocks = [_technical_energies(cards, astro, analysis)]
    if situation.type and situation.details:
        response = _SITUATION_RESPONSES[situation.type].format(card=cards[1].name)
        blocks.append(f"**About your {situation.type} situation:**\n\n{response}")
    blocks.append(f"**What your cards are saying:**\n\n{_card_readings(cards, situation)}")
    blocks.append(f"**What this means for you:**\n\n{_personal_guidance(situation, astro)}")
    blocks.append(f"**Moving forward:**\n\n{_next_steps(situation, cards[2])}")
    return "\n\n".join(blocks)


def generate_clarifying_response(question: str, cards: Sequence[TarotCard]) -> str:
    """Réponse à une question de clarification posée après la lecture finale."""
    _require_spread(cards)
    lowered = question.lower()
    past, present, guidance = cards[0], cards[1], cards[2]

    named = next((card for card in cards if card.name.lower() in lowered), None)
    if "card" in lowered or named is not None:
        card = named or present
        return (
            f"About the {card.name} - this card chose you because {_essence(card)} energy is "
            "exactly what you need right now. In your specific situation, this means trusting "
            f"your {_essence(card)} instincts rather than overthinking.\n\n"
            f"The {card.name} often appears when we need to stop second-guessing ourselves and "
            "just move forward with what feels authentic. What part of your situation would "
            f"benefit from more {_essence(card)} energy?"
        )

    if "what" in lowered and ("do" in lowered or "should" in lowered):
        return (
            f"Based on your reading, the main thing is to trust your {_essence(present)} "
            "instincts. Your cards aren't telling you what to do - they're reflecting what you "
            "already know deep down.\n\n"
            f"The {guidance.name} as your guidance card suggests approaching this with "
            f"{_essence(guidance)} energy. Instead of forcing an outcome, what would it look like "
            "to embody this energy and let things unfold naturally?\n\n"
            "What feels most authentic to who you are in this situation?"
        )

    if "why" in lowered or "mean" in lowered:
        return (
            f"The deeper meaning here is about your soul's evolution. Your {past.name} shows you "
            f"have the foundation of {_essence(past)} energy already built within you. The "
            f"{present.name} is activating this in your current situation.\n\n"
            "This isn't just about solving a problem - it's about you stepping into a new level "
            "of authenticity and self-trust. Your situation is actually your soul's chosen "
            f"classroom for developing {_essence(present)} mastery.\n\n"
            "What part of this resonates most with what you're experiencing?"
        )

    if "how" in lowered or "when" in lowered:
        return (
            f"Practically speaking, start by embodying the {_essence(present)} energy in small "
            'ways. Ask yourself throughout the day: "How would someone with strong '
            f'{_essence(present)} energy handle this?"\n\n'
            "The timing isn't about waiting for the perfect moment - it's about trusting "
            f"yourself enough to take aligned action. Your {guidance.name} guidance suggests the "
            f"path will become clear as you move forward with {_essence(guidance)} intention.\n\n"
            "What's one small step you could take today that would feel authentic to who you are?"
        )

    if any(word in lowered for word in ("relationship", "love", "partner")):
        return (
            "For relationships, your cards are saying trust your gut feelings about this person. "
            f"The {present.name} often appears when we need to stop analyzing and start feeling "
            "into what's actually true.\n\n"
            f"Your {past.name} foundation gives you the {_essence(past)} strength to be authentic "
            "in relationships. Don't dim your light to make someone else comfortable.\n\n"
            "What is your intuition telling you about this relationship that your mind keeps "
            "trying to talk you out of?"
        )

    return (
        "Looking at your reading again, the main message is about trusting yourself more deeply. "
        f"Your {present.name} in the present position is asking you to stop seeking external "
        "validation and start honoring your inner knowing.\n\n"
        "The situation you're dealing with is actually perfect for developing this self-trust. "
        "Every challenge is your soul's way of strengthening your authentic power.\n\n"
        "What part of your reading felt most true to you? That's usually where the real "
        "guidance is."
    )


# -------------------- Prompt du narrateur --------------------


def build_narrative_prompt(
    analysis: DeepAnalysis,
    astro: AstrologyData | None,
    cards: Sequence[TarotCard],
    responses: Sequence[str],
) -> list[dict[str, str]]:
    """
    Construit les messages (system + user) transmis au narrateur.

    Le contexte est un résumé structuré: thème, cartes positionnelles, profil, défis, actions.
    Les réponses brutes de l'utilisateur ne sont incluses que dans le message utilisateur.
    """
    profile = analysis.psychological_profile
    lines: list[str] = []
    if astro is not None:
        lines.append(
            f"Chart: Sun {astro.sun_sign}, Moon {astro.moon_sign}, Rising {astro.rising_sign}; "
            f"North Node {astro.north_node}; {astro.galactic_alignment}"
        )
    for label, card in zip(("Foundation", "Present", "Guidance"), cards, strict=False):
        lines.append(f"{label}: {card.name} ({', '.join(card.keywords[:3]) or card.suit})")
    lines.append(
        f"Profile: {profile.dominant_archetype}, consciousness "
        f"{profile.consciousness_level:.2f}, emotional {profile.emotional_maturity:.2f}, "
        f"spiritual {profile.spiritual_awareness:.2f}, stage "
        f"{analysis.evolutionary_stage.current_level}"
    )
    lines.extend(f"Challenge: {c.description}" for c in analysis.current_challenges)
    lines.extend(f"Action: {i.action} ({i.timing})" for i in analysis.actionable_insights)
    situation = extract_situation(responses)
    if situation.type:
        lines.append(f"Situation: {situation.type}, emotion {situation.emotion}")

    shared = "\n".join(f"- {r}" for r in responses)
    return [
        {"role": "system", "content": NARRATIVE_SYSTEM},
        {
            "role": "user",
            "content": "Context:\n" + "\n".join(lines) + f"\nWhat I shared:\n{shared}",
        },
    ]
