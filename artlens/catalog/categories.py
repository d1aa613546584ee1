"""Period/style to category mapping for snapshot records that matched no catalog entry."""

from __future__ import annotations

import logging

from artlens.catalog.normalize import fold

logger = logging.getLogger(__name__)

UNKNOWN_CATEGORY = "unknown"

# category id -> keywords (es / en / fr / it / de synonyms, style names, emblematic artists).
# Insertion order is the match priority.
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    # Abstract and modern movements
    "abstract-expressionismo": [
        "abstract expressionism", "expresionismo abstracto", "expressionnisme abstrait",
        "pollock", "rothko", "de kooning",
    ],
    "arte-abstracto": ["abstract", "abstracto", "abstrait", "abstraction", "non-figurative"],
    "abstraction-geometrique": [
        "geometric abstraction", "abstracción geométrica", "geometrique", "constructivism", "suprematism",
    ],
    "arte-conceptual": ["conceptual", "conceptuel", "concept art", "idea art"],
    # Academic and classical
    "academismo": ["academic", "academicismo", "académique", "academic art", "salon"],
    "academismo-clasico": ["academic classicism", "academicismo clásico", "classical academic"],
    "academismo-realista": ["academic realism", "academicismo realista", "realistic academic"],
    # Art nouveau and decorative arts
    "art-nouveau": ["art nouveau", "modernismo", "jugendstil", "liberty", "secession"],
    "art-deco": ["art deco", "art déco", "deco", "streamline"],
    "aesthetic-movement": ["aesthetic", "aestheticism", "esteticismo", "esthétique"],
    # Impressionism and post-impressionism
    "impresionismo": ["impressionism", "impresionismo", "impressionnisme", "monet", "renoir", "degas"],
    "american-impressionism": ["american impressionism", "impresionismo americano"],
    "neo-impresionismo": ["neo-impressionism", "pointillism", "puntillismo", "seurat", "signac"],
    "post-impressionismo": [
        "post-impressionism", "postimpresionismo", "post-impressionnisme", "cezanne", "van gogh", "gauguin",
    ],
    # Renaissance
    "renacimiento": ["renaissance", "renacimiento", "renaixement", "rinascimento"],
    "quattrocento": ["quattrocento", "early renaissance", "temprano"],
    "alto-renacimiento": [
        "high renaissance", "alto renacimiento", "haute renaissance", "leonardo", "michelangelo", "rafael",
    ],
    "renacimiento-nordico": [
        "northern renaissance", "renacimiento nórdico", "renaissance nordique", "flemish renaissance",
    ],
    # Baroque
    "barroco": ["baroque", "barroco", "barocco", "barock"],
    "barroco-espanol": ["spanish baroque", "barroco español", "baroque espagnol", "velazquez", "murillo"],
    "barroco-flamenco": ["flemish baroque", "barroco flamenco", "rubens", "van dyck"],
    # Gothic and medieval
    "arte-gotico": ["gothic", "gótico", "gothique", "medieval gothic", "gotico", "gotik"],
    "arte-medieval-gotico": ["medieval gothic", "gótico medieval", "late medieval"],
    "arte-medieval-romanico": ["romanesque", "románico", "roman", "romanico"],
    "arte-romanico": ["romanesque", "románico", "romanico"],
    "arte-medieval": ["medieval", "middle ages", "edad media", "médiéval", "mittelalter"],
    # Byzantine and ancient
    "arte-bizantino": ["byzantine", "bizantino", "byzantin"],
    "arte-antiguo": ["ancient", "antiguo", "antique", "antiquity"],
    "arte-romano": ["roman", "romano", "romain", "ancient rome"],
    "arte-griego": ["greek", "griego", "grec", "hellenic", "helenístico"],
    "arte-egipcio": ["egyptian", "egipcio", "égyptien", "egypt"],
    "neolitico": ["neolithic", "neolítico", "néolithique", "stone age"],
    # Modern movements
    "cubismo": ["cubism", "cubismo", "cubisme", "picasso", "braque"],
    "surrealismo": ["surrealism", "surrealismo", "surréalisme", "dali", "magritte"],
    "dadaismo": ["dada", "dadaism", "dadaísmo", "dadaïsme"],
    "futurismo": ["futurism", "futurismo", "futurisme", "boccioni"],
    "expresionismo": ["expressionism", "expresionismo", "expressionnisme", "munch"],
    "neo-expressionismo": ["neo-expressionism", "neo-expresionismo", "neue wilde"],
    "fauvismo": ["fauvism", "fauvismo", "fauvisme", "matisse", "derain"],
    # Contemporary
    "arte-contemporaneo": ["contemporary", "contemporáneo", "contemporain", "current art"],
    "neo-pop": ["neo-pop", "neo pop", "new pop"],
    "pop-art": ["pop art", "pop", "warhol", "lichtenstein"],
    "op-art": ["op art", "optical art", "arte óptico"],
    # Realism
    "realismo": ["realism", "realismo", "réalisme", "realistic"],
    "hiperrealismo-fotorrealismo": ["hyperrealism", "photorealism", "hiperrealismo", "fotorrealismo"],
    "realismo-magico": ["magic realism", "realismo mágico", "réalisme magique"],
    "realismo-social": ["social realism", "realismo social", "socialist"],
    "realismo-socialista": ["socialist realism", "realismo socialista", "soviet"],
    # Romanticism, neoclassicism, rococo, mannerism
    "romanticismo": ["romanticism", "romanticismo", "romantisme", "romantic"],
    "romanticismo-americano": ["american romanticism", "romanticismo americano"],
    "neoclasicismo": ["neoclassicism", "neoclasicismo", "néoclassicisme", "neoclassical"],
    "rococo": ["rococo", "rococó", "rocaille"],
    "manierismo": ["mannerism", "manierismo", "maniérisme", "mannerist"],
    # Design movements
    "bauhaus": ["bauhaus", "gropius", "modernist design"],
    "de-stijl": ["de stijl", "neoplasticism", "mondrian"],
    "simbolismo": ["symbolism", "simbolismo", "symbolisme", "symbolist"],
    "minimalismo": ["minimalism", "minimalismo", "minimalisme", "minimal art"],
    # Asian art
    "ukiyo-e": ["ukiyo-e", "ukiyo", "japanese prints", "hokusai", "hiroshige"],
    "nihonga": ["nihonga", "japanese painting", "pintura japonesa"],
    "arte-mughal": ["mughal", "mogol", "moghul", "indian miniature"],
    "arte-chino-clasico": ["chinese", "chino", "chinois", "china", "song", "ming", "qing"],
    "arte-japones": ["japanese", "japonés", "japonais", "japan", "edo"],
    "arte-budista": ["buddhist", "budista", "bouddhiste", "buddha"],
    "arte-islamico": ["islamic", "islámico", "islamique", "muslim", "mudéjar", "nazarí"],
    # African and indigenous art
    "arte-africano": ["african", "africano", "africain", "africa"],
    "arte-benin": ["benin", "benín", "kingdom of benin"],
    "arte-aborigen-australiano": ["aboriginal", "aborigen", "aborigène", "australian indigenous"],
    "arte-precolombino": ["pre-columbian", "precolombino", "précolombien", "aztec", "maya", "inca"],
    # American movements
    "american-regionalism": ["american regionalism", "regionalismo americano", "grant wood"],
    "american-realism": ["american realism", "realismo americano"],
    "ashcan-school": ["ashcan", "ash can", "the eight"],
    "hudson-river-school": ["hudson river", "hudson river school", "american landscape"],
    "harlem-renaissance": ["harlem renaissance", "renacimiento de harlem", "harlem"],
    # Latin American art
    "muralismo-mexicano": ["mexican muralism", "muralismo mexicano", "rivera", "orozco", "siqueiros"],
    "arte-latinoamericano": ["latin american", "latinoamericano", "latino-américain"],
    # Color field
    "color-field-painting": ["color field", "campo de color", "rothko", "newman"],
    "tachisme-art-informel": ["tachisme", "art informel", "informal art"],
    # Genres
    "pintura-paisaje": ["landscape", "paisaje", "paysage"],
    "pintura-marina": ["marine", "marina", "seascape"],
    "arte-botanico": ["botanical", "botánico", "botanique", "flower painting"],
    "retratismo": ["portrait", "retrato", "portraiture"],
    "pintura-genero": ["genre painting", "pintura de género", "genre"],
    "arte-religioso": ["religious", "religioso", "religieux", "sacred"],
    "arte-cristiano": ["christian", "cristiano", "chrétien", "christianity"],
    "pintura-mitologica": ["mythological", "mitológica", "mythologique", "mythology"],
    # Historical periods
    "arte-victoriano": ["victorian", "victoriano", "victorien"],
    "arte-eduardiano": ["edwardian", "eduardiano", "édouardien"],
    "belle-epoque": ["belle époque", "belle epoque", "beautiful era"],
    "arte-anglo-sajon": ["anglo-saxon", "anglo-sajón"],
    # Modern and avant-garde
    "arte-moderno": ["modern", "moderno", "moderne", "modernist", "20th century", "siglo xx"],
    "modernismo": ["modernism", "modernismo", "modernisme"],
    "vanguardias": ["avant-garde", "vanguardia", "avant garde"],
    # Outsider and folk art
    "art-brut": ["art brut", "outsider art", "raw art"],
    "arte-naif": ["naive", "naïf", "naif", "primitive", "folk art"],
    "arte-popular": ["folk", "popular", "populaire", "traditional"],
    "arte-digital": ["digital", "digital art", "arte digital", "computer art"],
    "orientalismo": ["orientalism", "orientalismo", "orientalisme", "orient"],
    "primitivismo": ["primitivism", "primitivismo", "primitivisme", "primitive"],
    "constructivismo": ["constructivism", "constructivismo", "constructivisme"],
    "suprematismo": ["suprematism", "suprematismo", "suprématisme", "malevich"],
    "tonalismo": ["tonalism", "tonalismo", "tonalisme"],
    "luminismo": ["luminism", "luminismo", "luminisme"],
    "arte-prerrafaelita": ["pre-raphaelite", "prerrafaelita", "préraphaélite", "prb"],
    "arts-and-crafts": ["arts and crafts", "artes y oficios", "william morris"],
    "arte-secesion-vienesa": ["vienna secession", "secession", "secesión vienesa", "klimt"],
    "puntillismo": ["pointillism", "puntillismo", "pointillisme"],
    "naturalismo": ["naturalism", "naturalismo", "naturalisme", "naturalist"],
    "verismo": ["verism", "verismo", "vérisme"],
    "cloisonnismo": ["cloisonnism", "cloisonnismo", "cloisonnisme"],
    "nabis": ["nabis", "nabi", "bonnard", "vuillard"],
    "orfismo": ["orphism", "orfismo", "orphisme", "delaunay"],
    "vorticismo": ["vorticism", "vorticismo", "vorticisme", "lewis"],
    "precisionismo": ["precisionism", "precisionismo", "precisionnisme"],
    "arte-proletario": ["proletarian", "proletario", "prolétarien", "worker"],
    # Land, performance, installation, media
    "land-art-arte-tierra": ["land art", "earth art", "arte de tierra", "earthworks"],
    "arte-performance": ["performance", "performance art", "happening"],
    "arte-instalacion": ["installation", "instalación", "installation art"],
    "video-art": ["video art", "video", "arte de video"],
    "arte-cinetico": ["kinetic", "cinético", "cinétique", "kinetic art"],
    "arte-povera": ["arte povera", "povera"],
    "fluxus": ["fluxus"],
    "neo-dada": ["neo-dada", "neo dada"],
    "hard-edge-painting": ["hard-edge", "hard edge", "geometric"],
    "abstraccion-lirica": ["lyrical abstraction", "abstracción lírica", "abstraction lyrique"],
    "abstraccion-pospictorialista": ["post-painterly", "post painterly", "pospictorialista"],
    "transvanguardia": ["transavantgarde", "transvanguardia", "trans-avant"],
    "nueva-escuela-leipzig": ["new leipzig", "leipzig school", "nueva leipzig"],
    "stuckismo": ["stuckism", "stuckismo", "stuckist"],
    "superflat": ["superflat", "murakami"],
    "neo-geo": ["neo-geo", "neo geo", "geometric"],
    "pictures-generation": ["pictures generation", "generación pictures", "cindy sherman"],
    "young-british-artists": ["yba", "young british artists", "brit art"],
    "neo-romanticismo": ["neo-romanticism", "neo-romanticismo"],
    "new-objectivity": ["neue sachlichkeit", "new objectivity", "nueva objetividad"],
    "arte-metafisico": ["metaphysical", "metafísico", "métaphysique", "de chirico"],
    "arte-optico-cinetico": ["optical kinetic", "óptico cinético"],
    "neoclasicismo-weimar": ["weimar classicism", "weimar neoclassicism"],
    "rinpa-school": ["rinpa", "rimpa", "sotatsu", "korin"],
    "pintura-literati": ["literati", "wenren", "scholar painting", "pintura erudita"],
    # Regional traditions
    "arte-persa": ["persian", "persa", "perse", "iran", "safavid"],
    "arte-otomano": ["ottoman", "otomano", "ottoman empire"],
    "arte-tibetano": ["tibetan", "tibetano", "tibet", "thangka"],
    "arte-coreano": ["korean", "coreano", "coréen", "korea", "joseon"],
    "arte-khmer": ["khmer", "cambodian", "camboyano", "angkor"],
    "arte-thai": ["thai", "tailandés", "thaïlandais", "thailand"],
    "arte-maori": ["maori", "maorí", "new zealand"],
    "arte-polinesio": ["polynesian", "polinesio", "polynésien"],
    "arte-nativo-americano": ["native american", "nativo americano", "indigenous american"],
    "arte-inuit": ["inuit", "eskimo", "arctic"],
}

_FOLDED_KEYWORDS: list[tuple[str, list[str]]] = [
    (category_id, [fold(keyword) for keyword in keywords])
    for category_id, keywords in CATEGORY_KEYWORDS.items()
]


def map_period_to_category(period: str | None) -> str:
    """Category id for an AI-detected period/style string, or ``UNKNOWN_CATEGORY``.

    Exact category-id match wins; otherwise the first keyword that contains,
    or is contained in, the period string.
    """
    if not period or not period.strip():
        return UNKNOWN_CATEGORY

    folded = fold(period)
    if folded in CATEGORY_KEYWORDS:
        return folded

    for category_id, keywords in _FOLDED_KEYWORDS:
        for keyword in keywords:
            if keyword in folded or folded in keyword:
                logger.debug("Period %r -> %s via %r", period, category_id, keyword)
                return category_id

    logger.info("No category for period %r", period)
    return UNKNOWN_CATEGORY
