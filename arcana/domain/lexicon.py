"""
Tables lexicales statiques du moteur d'analyse.

Ce module regroupe toutes les données de référence (signes, planètes, paliers de conscience,
chakras, vocabulaires de thèmes, correspondances des arcanes majeurs). Ce sont des données de
contenu, pas de la logique : elles sont figées (tuples / mappings en lecture seule) et ne doivent
être modifiées qu'en versionnant le module.
"""

# ============================================================
# Module : arcana/domain/lexicon.py
# Objet  : Données de référence (mots-clés, pondérations, tables).
# ============================================================

from __future__ import annotations

from types import MappingProxyType

LEXICON_VERSION = "1.0.0"

ZODIAC_SIGNS: tuple[str, ...] = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)

# Signe neutre « centre galactique » utilisé quand rien ne correspond.
DEFAULT_SIGN = "Sagittarius"

# --- Analyseur d'énergie -------------------------------------------------

# L'ordre d'insertion sert de départage entre signes à score égal.
SIGN_KEYWORDS = MappingProxyType(
    {
        "Aries": ("action", "start", "begin", "lead", "fight", "courage", "bold", "first",
                  "pioneer", "energy", "fire", "passion", "drive", "initiative", "competitive"),
        "Taurus": ("stable", "steady", "comfort", "security", "money", "material", "earth",
                   "practical", "stubborn", "luxury", "beauty", "sensual", "slow", "reliable"),
        "Gemini": ("communicate", "talk", "think", "learn", "curious", "quick", "change",
                   "adapt", "social", "mental", "ideas", "information", "versatile", "witty"),
        "Cancer": ("home", "family", "mother", "nurture", "care", "emotional", "sensitive",
                   "protect", "comfort", "intuitive", "moody", "past", "memory", "feelings"),
        "Leo": ("creative", "shine", "center", "attention", "dramatic", "proud", "generous",
                "heart", "performance", "leadership", "confidence", "royal", "sun", "radiant"),
        "Virgo": ("perfect", "detail", "analyze", "organize", "service", "health", "work",
                  "practical", "critical", "precise", "helpful", "systematic", "pure", "modest"),
        "Libra": ("balance", "harmony", "relationship", "partner", "beauty", "fair", "justice",
                  "peace", "diplomatic", "social", "aesthetic", "cooperation", "elegant"),
        "Scorpio": ("deep", "intense", "transform", "mystery", "power", "secret", "death",
                    "rebirth", "passionate", "magnetic", "psychic", "hidden", "penetrating"),
        "Sagittarius": ("freedom", "adventure", "travel", "philosophy", "truth", "expand",
                        "explore", "optimistic", "spiritual", "higher", "meaning", "wisdom",
                        "journey"),
        "Capricorn": ("achieve", "goal", "ambition", "structure", "authority", "responsibility",
                      "discipline", "mountain", "climb", "success", "traditional", "mature"),
        "Aquarius": ("unique", "different", "future", "technology", "humanitarian", "rebel",
                     "innovative", "group", "friendship", "eccentric", "progressive", "detached"),
        "Pisces": ("dream", "intuitive", "spiritual", "compassionate", "artistic", "escape",
                   "flow", "emotional", "psychic", "sacrifice", "boundless", "mystical"),
    }
)

PLANETARY_KEYWORDS = MappingProxyType(
    {
        "Mars": ("anger", "fight", "aggressive", "warrior", "conflict", "assertive",
                 "competitive", "direct"),
        "Venus": ("love", "beauty", "relationship", "harmony", "pleasure", "artistic",
                  "romantic", "attractive"),
        "Mercury": ("communication", "quick", "mental", "clever", "information", "travel",
                    "messenger", "witty"),
        "Moon": ("emotional", "intuitive", "nurturing", "cyclical", "receptive", "subconscious",
                 "maternal"),
        "Sun": ("confident", "radiant", "central", "vital", "creative", "leadership", "ego",
                "identity"),
        "Jupiter": ("expand", "optimistic", "philosophical", "generous", "abundant", "wisdom",
                    "growth"),
        "Saturn": ("discipline", "structure", "limitation", "responsibility", "authority",
                   "traditional", "mature"),
        "Uranus": ("sudden", "revolutionary", "innovative", "eccentric", "breakthrough",
                   "shocking", "progressive"),
        "Neptune": ("mystical", "dreamy", "illusion", "spiritual", "compassionate", "artistic",
                    "escapist"),
        "Pluto": ("transformation", "power", "death", "rebirth", "intense", "hidden",
                  "regeneration"),
    }
)

# Bonus ajouté aux signes associés, par correspondance planétaire trouvée.
PLANETARY_SIGN_BONUS = MappingProxyType(
    {
        "Mars": (("Aries", 0.8), ("Scorpio", 0.5)),
        "Venus": (("Taurus", 0.8), ("Libra", 0.8)),
        "Mercury": (("Gemini", 0.8), ("Virgo", 0.8)),
        "Moon": (("Cancer", 0.8),),
        "Sun": (("Leo", 0.8),),
        "Jupiter": (("Sagittarius", 0.8), ("Pisces", 0.5)),
        "Saturn": (("Capricorn", 0.8), ("Aquarius", 0.5)),
        "Uranus": (("Aquarius", 0.8),),
        "Neptune": (("Pisces", 0.8),),
        "Pluto": (("Scorpio", 0.8),),
    }
)

# --- Dérivation du thème natal -------------------------------------------

# (signe, (mois_début, jour_début), (mois_fin, jour_fin)) bornes incluses.
SUN_SIGN_RANGES: tuple[tuple[str, tuple[int, int], tuple[int, int]], ...] = (
    ("Aries", (3, 21), (4, 19)),
    ("Taurus", (4, 20), (5, 20)),
    ("Gemini", (5, 21), (6, 20)),
    ("Cancer", (6, 21), (7, 22)),
    ("Leo", (7, 23), (8, 22)),
    ("Virgo", (8, 23), (9, 22)),
    ("Libra", (9, 23), (10, 22)),
    ("Scorpio", (10, 23), (11, 21)),
    ("Sagittarius", (11, 22), (12, 21)),
    ("Capricorn", (12, 22), (1, 19)),
    ("Aquarius", (1, 20), (2, 18)),
)
SUN_SIGN_FALLBACK = "Pisces"

NORTH_NODES = MappingProxyType(
    {
        "Aries": "Libra - Learning cooperation and balance",
        "Taurus": "Scorpio - Embracing transformation and depth",
        "Gemini": "Sagittarius - Seeking higher wisdom and meaning",
        "Cancer": "Capricorn - Building structure and authority",
        "Leo": "Aquarius - Serving the collective consciousness",
        "Virgo": "Pisces - Developing intuition and compassion",
        "Libra": "Aries - Cultivating independence and leadership",
        "Scorpio": "Taurus - Finding stability and simplicity",
        "Sagittarius": "Gemini - Mastering communication and details",
        "Capricorn": "Cancer - Nurturing emotional intelligence",
        "Aquarius": "Leo - Expressing authentic creativity",
        "Pisces": "Virgo - Grounding dreams in practical service",
    }
)
NORTH_NODE_FALLBACK = "Evolutionary growth path"

SOUTH_NODES = MappingProxyType(
    {
        "Aries": "Libra - Past life mastery of relationships",
        "Taurus": "Scorpio - Karmic understanding of power",
        "Gemini": "Sagittarius - Previous wisdom teaching",
        "Cancer": "Capricorn - Authority from past incarnations",
        "Leo": "Aquarius - Collective service experience",
        "Virgo": "Pisces - Spiritual devotion mastery",
        "Libra": "Aries - Warrior energy from past lives",
        "Scorpio": "Taurus - Material world mastery",
        "Sagittarius": "Gemini - Communication gifts carried forward",
        "Capricorn": "Cancer - Nurturing wisdom from past",
        "Aquarius": "Leo - Creative leadership experience",
        "Pisces": "Virgo - Service and healing mastery",
    }
)
SOUTH_NODE_FALLBACK = "Karmic gifts from past lives"

EVOLUTIONARY_THEMES = MappingProxyType(
    {
        "Aries": "Pioneering consciousness - breaking through old paradigms",
        "Taurus": "Grounding new earth frequencies - stabilizing change",
        "Gemini": "Bridging dimensions - translating cosmic information",
        "Cancer": "Nurturing collective healing - emotional alchemy",
        "Leo": "Radiating authentic self - creative leadership",
        "Virgo": "Perfecting service to evolution - practical mysticism",
        "Libra": "Harmonizing opposites - relationship as spiritual path",
        "Scorpio": "Transforming shadow into light - death/rebirth mastery",
        "Sagittarius": "Expanding consciousness - philosophical evolution",
        "Capricorn": "Building new structures - responsible leadership",
        "Aquarius": "Innovating for humanity - collective awakening",
        "Pisces": "Dissolving illusions - compassionate transcendence",
    }
)
EVOLUTIONARY_THEME_FALLBACK = "Unique evolutionary path"

SOUL_PURPOSES = MappingProxyType(
    {
        "Aries": "To initiate new cycles of consciousness and inspire others to break free "
        "from limitation",
        "Taurus": "To anchor higher frequencies into physical reality and create sustainable "
        "abundance",
        "Gemini": "To connect diverse perspectives and facilitate communication between "
        "different worlds",
        "Cancer": "To heal ancestral patterns and nurture the collective emotional body",
        "Leo": "To express divine creativity and inspire others to shine their authentic light",
        "Virgo": "To perfect systems of service and help others integrate spiritual wisdom "
        "practically",
        "Libra": "To create harmony and teach the art of conscious relationship",
        "Scorpio": "To transform collective shadow and guide others through deep healing",
        "Sagittarius": "To expand human consciousness and share universal wisdom",
        "Capricorn": "To build structures that support collective evolution and responsible "
        "stewardship",
        "Aquarius": "To innovate solutions for humanity and anchor future consciousness",
        "Pisces": "To dissolve separation and embody unconditional love and compassion",
    }
)
SOUL_PURPOSE_FALLBACK = "To contribute your unique gifts to collective evolution"

CURRENT_LESSONS = MappingProxyType(
    {
        "Aries": ("Balancing independence with cooperation",
                  "Channeling warrior energy constructively", "Leading with heart wisdom"),
        "Taurus": ("Embracing change while maintaining stability",
                   "Sharing resources generously", "Finding security within"),
        "Gemini": ("Deepening beyond surface connections", "Integrating scattered knowledge",
                   "Speaking truth with compassion"),
        "Cancer": ("Setting healthy emotional boundaries",
                   "Healing without absorbing others' pain", "Trusting intuitive guidance"),
        "Leo": ("Expressing creativity without ego attachment", "Sharing spotlight with others",
                "Leading through authentic example"),
        "Virgo": ("Accepting imperfection in service", "Trusting intuition alongside analysis",
                  "Serving without martyrdom"),
        "Libra": ("Making decisions from inner knowing",
                  "Maintaining self while in relationship",
                  "Creating harmony without people-pleasing"),
        "Scorpio": ("Transforming without destroying", "Sharing power rather than controlling",
                    "Healing through vulnerability"),
        "Sagittarius": ("Grounding wisdom in practical action",
                        "Teaching through lived experience", "Expanding without losing focus"),
        "Capricorn": ("Leading with compassion", "Building without rigidity",
                      "Achieving while nurturing relationships"),
        "Aquarius": ("Balancing innovation with tradition",
                     "Connecting individually while serving collectively",
                     "Grounding visions in reality"),
        "Pisces": ("Maintaining boundaries while being compassionate",
                   "Discerning truth from illusion", "Serving without sacrificing self"),
    }
)
CURRENT_LESSONS_FALLBACK = (
    "Integrating your unique gifts",
    "Serving your highest purpose",
    "Balancing self and others",
)

KARMATIC_PATTERNS = MappingProxyType(
    {
        "Aries": ("Impatience with others' pace", "Tendency to act before thinking",
                  "Difficulty with collaboration"),
        "Taurus": ("Resistance to necessary change", "Attachment to material security",
                   "Stubbornness in beliefs"),
        "Gemini": ("Scattered energy and focus", "Superficial connections",
                   "Avoiding emotional depth"),
        "Cancer": ("Over-nurturing others", "Emotional manipulation", "Living in the past"),
        "Leo": ("Need for constant validation", "Drama and attention-seeking",
                "Pride blocking growth"),
        "Virgo": ("Perfectionism and criticism", "Worry and anxiety patterns",
                  "Serving others while neglecting self"),
        "Libra": ("Avoiding conflict and decisions", "People-pleasing patterns",
                  "Losing self in relationships"),
        "Scorpio": ("Control and manipulation", "Holding grudges", "Fear of vulnerability"),
        "Sagittarius": ("Preaching without practicing", "Avoiding commitment",
                        "Intellectual arrogance"),
        "Capricorn": ("Workaholism and achievement addiction", "Emotional coldness",
                      "Authoritarian tendencies"),
        "Aquarius": ("Emotional detachment", "Rebelliousness without purpose",
                     "Superiority complex"),
        "Pisces": ("Victim consciousness", "Escapism and avoidance", "Boundary dissolution"),
    }
)
KARMATIC_PATTERNS_FALLBACK = (
    "Patterns ready for transformation",
    "Old habits seeking evolution",
    "Shadow aspects becoming conscious",
)

GALACTIC_CENTER_DEGREE = 27
GALACTIC_ALIGNMENTS = MappingProxyType(
    {
        "direct": "Direct alignment with Galactic Center - you're a cosmic download receiver",
        "opposition": "Opposition to Galactic Center - you translate cosmic wisdom for others",
        "square": "Square to Galactic Center - you challenge and refine cosmic information",
        "supportive": "Supportive angle to Galactic Center - you harmonize with cosmic "
        "frequencies",
        "unique": "Unique relationship with Galactic Center - your own cosmic mission",
    }
)
SQUARE_SIGNS = frozenset({"Virgo", "Pisces"})
SUPPORTIVE_SIGNS = frozenset({"Leo", "Libra"})

TRANSIT_PLUTO = "Pluto in Capricorn - final degrees of systemic transformation"
TRANSIT_JUPITER = "Jupiter expanding consciousness through current sign"
TRANSITS_ALWAYS = (
    "Galactic Center activation - evolutionary downloads available",
    "Collective awakening frequencies intensifying",
)

# --- Analyse approfondie --------------------------------------------------

# (palier, mots-clés, plancher, archétype) dans l'ordre de balayage.
CONSCIOUSNESS_INDICATORS: tuple[tuple[str, tuple[str, ...], float, str], ...] = (
    ("victim", ("can't", "impossible", "stuck", "trapped", "helpless", "unfair", "why me"),
     0.2, "Victim"),
    ("survivor", ("trying", "struggling", "fighting", "difficult", "hard", "managing"),
     0.4, "Warrior"),
    ("creator", ("choosing", "creating", "manifesting", "intending", "designing", "building"),
     0.7, "Creator"),
    ("transcendent", ("allowing", "flowing", "trusting", "surrendering", "being", "witnessing"),
     0.9, "Sage"),
)
DEFAULT_ARCHETYPE = "Seeker"

EMOTIONAL_MATURITY_MARKERS: tuple[tuple[str, tuple[str, ...], float], ...] = (
    ("reactive", ("angry", "frustrated", "upset", "mad", "hate", "can't stand"), 0.3),
    ("responsive", ("feel", "sense", "notice", "aware", "understand", "recognize"), 0.6),
    ("integrated", ("compassion", "acceptance", "peace", "love", "gratitude", "joy"), 0.8),
    ("transcendent", ("oneness", "unity", "bliss", "divine", "sacred", "infinite"), 0.95),
)

SPIRITUAL_AWARENESS_LEVELS: tuple[tuple[str, tuple[str, ...], float], ...] = (
    ("material", ("money", "success", "achievement", "status", "possession", "security"), 0.2),
    ("emotional", ("relationship", "love", "connection", "family", "friendship", "belonging"),
     0.4),
    ("mental", ("understanding", "knowledge", "learning", "growth", "wisdom", "insight"), 0.6),
    ("spiritual", ("purpose", "meaning", "soul", "divine", "universe", "consciousness"), 0.8),
    ("cosmic", ("galactic", "multidimensional", "quantum", "infinite", "eternal", "source"),
     0.95),
)

BASELINE_SCORE = 0.5

SHADOW_ASPECTS = MappingProxyType(
    {
        "Victim": ("Powerlessness", "Blame", "Helplessness"),
        "Warrior": ("Aggression", "Impatience", "Conflict"),
        "Creator": ("Perfectionism", "Control", "Ego"),
        "Sage": ("Detachment", "Superiority", "Isolation"),
        "Seeker": ("Restlessness", "Dissatisfaction", "Escapism"),
    }
)
SHADOW_ASPECTS_FALLBACK = ("Unknown patterns",)

CHAKRA_KEYWORDS = MappingProxyType(
    {
        "Root": ("security", "survival", "grounding", "stability", "fear"),
        "Sacral": ("creativity", "sexuality", "pleasure", "emotion", "flow"),
        "Solar": ("power", "confidence", "will", "control", "identity"),
        "Heart": ("love", "compassion", "connection", "healing", "forgiveness"),
        "Throat": ("communication", "truth", "expression", "voice", "speaking"),
        "Third Eye": ("intuition", "vision", "insight", "psychic", "seeing"),
        "Crown": ("spiritual", "divine", "consciousness", "enlightenment", "unity"),
    }
)

FLOW_INDICATORS = ("flow", "ease", "natural", "effortless", "smooth", "harmony")

AURIC_FIELD_BANDS: tuple[tuple[float, str], ...] = (
    (0.8, "Radiant and expansive"),
    (0.6, "Balanced and clear"),
    (0.4, "Developing and strengthening"),
)
AURIC_FIELD_FALLBACK = "Contracted and healing"

NEXT_EVOLUTION = MappingProxyType(
    {
        "Awakening": "Integration",
        "Integration": "Service",
        "Service": "Mastery",
        "Mastery": "Transcendence",
    }
)
NEXT_EVOLUTION_FALLBACK = "Continued growth"

SOUL_AGE_BANDS: tuple[tuple[float, str], ...] = (
    (1.6, "Old Soul"),
    (1.2, "Mature Soul"),
    (0.8, "Young Soul"),
)
SOUL_AGE_FALLBACK = "New Soul"

CHANGE_WORDS = ("ready", "change", "transform", "new", "different", "evolve")

DEFAULT_KARMATIC_LESSONS = ("Self-awareness", "Compassion", "Authenticity")
DEFAULT_INCARNATION_PURPOSE = "Learning and growth through experience"
DEFAULT_PRIMARY_MISSION = "Awakening consciousness and serving others"
SECONDARY_MISSIONS = (
    "Healing ancestral patterns",
    "Creative expression and inspiration",
    "Teaching through example",
)
DEFAULT_RELATIONSHIP_LESSONS = ("Authentic communication", "Healthy boundaries")

RELATIONAL_MARKERS = ("relationship", "people", "family")

THEME_VOCABULARY = (
    "love",
    "work",
    "family",
    "change",
    "fear",
    "growth",
    "relationship",
    "money",
    "health",
    "purpose",
)

# (mot-clé de carte, don) dans l'ordre d'évaluation.
CARD_GIFTS = (
    ("creativity", "Creative expression"),
    ("healing", "Healing abilities"),
    ("wisdom", "Teaching wisdom"),
)
CREATIVE_CARD_KEYWORDS = frozenset({"creativity", "art", "expression", "beauty", "inspiration"})

MAJOR_ARCANA_SIGNS = MappingProxyType(
    {
        "The Fool": "Aquarius",
        "The Magician": "Gemini",
        "The High Priestess": "Cancer",
        "The Empress": "Taurus",
        "The Emperor": "Aries",
        "The Hierophant": "Taurus",
        "The Lovers": "Gemini",
        "The Chariot": "Cancer",
        "Strength": "Leo",
        "The Hermit": "Virgo",
        "Wheel of Fortune": "Sagittarius",
        "Justice": "Libra",
        "The Hanged Man": "Pisces",
        "Death": "Scorpio",
        "Temperance": "Sagittarius",
        "The Devil": "Capricorn",
        "The Tower": "Aries",
        "The Star": "Aquarius",
        "The Moon": "Pisces",
        "The Sun": "Leo",
        "Judgement": "Scorpio",
        "The World": "Capricorn",
    }
)

# --- Profondeur de réponse ------------------------------------------------

VULNERABILITY_WORDS = ("feel", "scared", "confused", "hurt", "lost", "uncertain", "struggling",
                       "worried")
SPECIFICITY_WORDS = ("because", "when", "since", "after", "during", "while", "yesterday",
                     "today", "recently")
PERSONAL_WORDS = frozenset({"i", "me", "my", "myself"})
ACTION_WORDS = ("will", "going", "ready", "want", "need", "plan", "decide", "trying")
RESPONSE_THEMES = ("love", "work", "family", "relationship", "money", "health", "purpose",
                   "growth", "change", "fear")
