"""Identification prompts in the supported languages (es, en, fr).

Both prompts ask for the same JSON object so a single parser handles the
vision and the web-text replies.
"""

from __future__ import annotations

from artlens.types import Language

_ROLE = {
    Language.ES: (
        "Eres un historiador de arte experto con amplio conocimiento sobre obras de arte "
        "mundiales. Tu especialidad es identificar y proporcionar información precisa, "
        "verificable y concisa sobre pinturas, esculturas, arquitectura y monumentos."
    ),
    Language.EN: (
        "You are an expert art historian with extensive knowledge of world artworks. "
        "Your specialty is to identify and provide accurate, verifiable, and concise "
        "information about paintings, sculptures, architecture, and monuments."
    ),
    Language.FR: (
        "Vous êtes un historien d'art expert avec une connaissance approfondie des œuvres "
        "d'art mondiales. Votre spécialité est d'identifier et de fournir des informations "
        "précises, vérifiables et concises sur les peintures, sculptures, architecture et monuments."
    ),
}

_JSON_FORMAT = {
    Language.ES: """{
  "identified": true,
  "confidence": 0.95,
  "isMonument": true,
  "country": "España",
  "title": "título exacto de la obra",
  "artist": "nombre completo del artista",
  "year": "año o período exacto",
  "period": "período artístico (ej: Renacimiento, Barroco, Impresionismo)",
  "technique": "técnica utilizada (ej: óleo sobre lienzo, mármol, fresco)",
  "dimensions": "dimensiones de la obra si las conoces",
  "description": "descripción de 2-3 frases sobre la obra y su importancia histórica",
  "tags": ["tag1", "tag2", "tag3"]
}""",
    Language.EN: """{
  "identified": true,
  "confidence": 0.95,
  "isMonument": true,
  "country": "Spain",
  "title": "exact title of the artwork",
  "artist": "full name of the artist",
  "year": "exact year or period",
  "period": "artistic period (e.g., Renaissance, Baroque, Impressionism)",
  "technique": "technique used (e.g., oil on canvas, marble, fresco)",
  "dimensions": "dimensions of the artwork if you know them",
  "description": "2-3 sentence description of the work and its historical importance",
  "tags": ["tag1", "tag2", "tag3"]
}""",
    Language.FR: """{
  "identified": true,
  "confidence": 0.95,
  "isMonument": true,
  "country": "Espagne",
  "title": "titre exact de l'œuvre",
  "artist": "nom complet de l'artiste",
  "year": "année ou période exacte",
  "period": "période artistique (ex: Renaissance, Baroque, Impressionnisme)",
  "technique": "technique utilisée (ex: huile sur toile, marbre, fresque)",
  "dimensions": "dimensions de l'œuvre si vous les connaissez",
  "description": "description de 2-3 phrases sur l'œuvre et son importance historique",
  "tags": ["tag1", "tag2", "tag3"]
}""",
}

_NEGATIVE = '{\n  "identified": false,\n  "confidence": 0.0\n}'

_RULES = {
    Language.ES: """IMPORTANTE:
- Responde ÚNICAMENTE con el JSON, sin texto adicional antes o después
- Si no conoces algún dato con certeza, usa "Desconocido" en lugar de inventar información
- El campo "confidence" debe reflejar tu nivel de certeza (0.0-1.0)
- El campo "isMonument" es OBLIGATORIO y booleano: true SOLO para estructuras arquitectónicas \
(catedrales, torres, puentes, castillos, palacios, templos); false para pinturas y esculturas
- Incluye "country" SOLO si "isMonument" es true""",
    Language.EN: """IMPORTANT:
- Respond ONLY with the JSON, no additional text before or after
- If you don't know a piece of data with certainty, use "Unknown" instead of making it up
- The "confidence" field must reflect your level of certainty (0.0-1.0)
- The "isMonument" field is REQUIRED and boolean: true ONLY for architectural structures \
(cathedrals, towers, bridges, castles, palaces, temples); false for paintings and sculptures
- Include "country" ONLY if "isMonument" is true""",
    Language.FR: """IMPORTANT :
- Répondez UNIQUEMENT avec le JSON, sans texte supplémentaire avant ou après
- Si vous ne connaissez pas une donnée avec certitude, utilisez "Inconnu" au lieu d'inventer
- Le champ "confidence" doit refléter votre niveau de certitude (0.0-1.0)
- Le champ "isMonument" est OBLIGATOIRE et booléen : true UNIQUEMENT pour les structures \
architecturales (cathédrales, tours, ponts, châteaux, palais, temples) ; false pour les peintures et sculptures
- Incluez "country" SEULEMENT si "isMonument" est true""",
}

_VISION_TASK = {
    Language.ES: (
        "Analiza cuidadosamente la imagen proporcionada. Si reconoces una obra de arte "
        "específica, responde con un objeto JSON válido con este formato exacto:"
    ),
    Language.EN: (
        "Carefully analyze the provided image. If you recognize a specific artwork, "
        "respond with a valid JSON object in this exact format:"
    ),
    Language.FR: (
        "Analysez attentivement l'image fournie. Si vous reconnaissez une œuvre d'art "
        "spécifique, répondez avec un objet JSON valide dans ce format exact :"
    ),
}

_WEB_TASK = {
    Language.ES: "Si reconoces una obra de arte específica, responde con un objeto JSON válido con este formato exacto:",
    Language.EN: "If you recognize a specific artwork, respond with a valid JSON object in this exact format:",
    Language.FR: "Si vous reconnaissez une œuvre d'art spécifique, répondez avec un objet JSON valide dans ce format exact :",
}

_VISION_HINT = {
    Language.ES: "Una búsqueda web de la imagen sugiere: {hint}. Úsalo solo si coincide con lo que ves.",
    Language.EN: "A web search for this image suggests: {hint}. Use it only if it matches what you see.",
    Language.FR: "Une recherche web de l'image suggère : {hint}. Utilisez-le seulement s'il correspond à ce que vous voyez.",
}

_NEGATIVE_INTRO = {
    Language.ES: "Si NO puedes identificar la obra con certeza, responde:",
    Language.EN: "If you CANNOT identify the work with certainty, respond:",
    Language.FR: "Si vous NE pouvez PAS identifier l'œuvre avec certitude, répondez :",
}

_WEB_TEMPLATE = {
    Language.ES: """Tu misión es identificar una obra de arte específica a partir de la búsqueda de una imagen en la web.

URLS ENCONTRADAS EN LA WEB ({url_count} fuentes):
{urls}

ENTIDAD PRINCIPAL IDENTIFICADA: {top_entity}

PISTAS DE LA BÚSQUEDA WEB: {labels}

INFORMACIÓN EXTRAÍDA DE LAS PÁGINAS WEB:
{content}

La "Entidad Principal" es la identificación más confiable de la imagen. Prioriza información de \
museos, Wikipedia y sitios culturales reconocidos. Como es información indirecta, "confidence" \
debería ser menor a 0.8.""",
    Language.EN: """Your mission is to identify a specific artwork from the results of a web search for an image.

URLS FOUND ON THE WEB ({url_count} sources):
{urls}

TOP ENTITY IDENTIFIED: {top_entity}

WEB SEARCH HINTS: {labels}

INFORMATION EXTRACTED FROM WEB PAGES:
{content}

The "Top Entity" is the most reliable identification of the image. Prioritize information from \
museums, Wikipedia, and recognized cultural sites. Since this is indirect information, \
"confidence" should be below 0.8.""",
    Language.FR: """Votre mission est d'identifier une œuvre d'art spécifique à partir d'une recherche web d'une image.

URLS TROUVÉES SUR LE WEB ({url_count} sources) :
{urls}

ENTITÉ PRINCIPALE IDENTIFIÉE : {top_entity}

INDICES DE LA RECHERCHE WEB : {labels}

INFORMATIONS EXTRAITES DES PAGES WEB :
{content}

L'"Entité Principale" est l'identification la plus fiable de l'image. Priorisez les musées, \
Wikipédia et les sites culturels reconnus. Comme ce sont des informations indirectes, \
"confidence" devrait être inférieur à 0.8.""",
}

_NOT_AVAILABLE = {
    Language.ES: "No disponible",
    Language.EN: "Not available",
    Language.FR: "Non disponible",
}


def _response_contract(language: Language, task: str) -> str:
    return "\n\n".join([
        task,
        _JSON_FORMAT[language],
        _NEGATIVE_INTRO[language],
        _NEGATIVE,
        _RULES[language],
    ])


def build_vision_prompt(language: Language, hint: str | None = None) -> str:
    """Prompt for direct image classification, optionally seeded with a web-search hint."""
    parts = [_ROLE[language]]
    if hint:
        parts.append(_VISION_HINT[language].format(hint=hint))
    parts.append(_response_contract(language, _VISION_TASK[language]))
    return "\n\n".join(parts)


def build_web_analysis_prompt(
    language: Language,
    content: str,
    urls: list[str],
    labels: list[str],
    top_entity: str | None,
) -> str:
    """Prompt for extracting artwork metadata from scraped page text plus reverse-search hints."""
    missing = _NOT_AVAILABLE[language]
    body = _WEB_TEMPLATE[language].format(
        url_count=len(urls),
        urls="\n".join(f"{i}. {url}" for i, url in enumerate(urls, 1)) or missing,
        top_entity=top_entity or missing,
        labels=", ".join(labels) or missing,
        content=content,
    )
    return "\n\n".join([_ROLE[language], body, _response_contract(language, _WEB_TASK[language])])
