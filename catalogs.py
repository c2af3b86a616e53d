"""
MicroEstado Engine v1.0 — Default Catalogs
The built-in config bundle: roles, industries, projects, events, decrees,
economy constants, presets, remote-config defaults and the Level 2 catalogs.

Shapes mirror the JSON bundle accepted by config.load_config(), so a data
directory can override any of these without touching code.
"""

import copy


# ─────────────────────────────────────────────────────
# IDENTITY
# ─────────────────────────────────────────────────────

STATE_TYPES = [
    {"id": "NONE", "label": "Sin prefijo", "prefix": ""},
    {"id": "REPUBLIC", "label": "Republica", "prefix": "Republica de "},
    {"id": "KINGDOM", "label": "Reino", "prefix": "Reino de "},
    {"id": "FEDERATION", "label": "Federacion", "prefix": "Federacion de "},
    {"id": "PRINCIPALITY", "label": "Principado", "prefix": "Principado de "},
    {"id": "OTHER", "label": "Otro", "prefix": ""},
]

GEOGRAPHIES = ["archipelago", "coastal", "mountain", "desert", "forest", "urban"]


# ─────────────────────────────────────────────────────
# ROLES
# ─────────────────────────────────────────────────────

ROLES = [
    {
        "id": "PRESIDENT",
        "labels": {"male": "Presidente", "female": "Presidenta",
                   "neutral": "Jefatura de Estado"},
        "flavorText": "Mandato con contrapesos y prensa atenta.",
        "checksBalances": True,
        "modifiers": {"decisionSpeed": 1, "statDriftMultiplier": 1,
                      "institutionalTrustDrift": 0.02, "negotiationEventFreq": 0.1},
    },
    {
        "id": "PRIME_MINISTER",
        "labels": {"male": "Primer Ministro", "female": "Primera Ministra",
                   "neutral": "Jefatura de Gobierno"},
        "flavorText": "Gobierna mientras la coalicion aguante.",
        "coalitionBlock": True,
        "modifiers": {"decisionSpeed": 0.9, "statDriftMultiplier": 1,
                      "stabilityDrift": 0.01, "negotiationEventFreq": 0.3},
    },
    {
        "id": "KING_PARLIAMENT",
        "labels": {"male": "Rey (Parlamentario)", "female": "Reina (Parlamentaria)",
                   "neutral": "Monarquia Parlamentaria"},
        "flavorText": "La corona inaugura, el parlamento decide.",
        "checksBalances": True,
        "modifiers": {"decisionSpeed": 0.9, "statDriftMultiplier": 0.9,
                      "stabilityDrift": 0.03, "reputationDrift": 0.01,
                      "diplomacyEventFreq": 0.2},
    },
    {
        "id": "CHANCELLOR",
        "labels": {"male": "Canciller", "female": "Canciller", "neutral": "Cancilleria"},
        "flavorText": "Tecnocracia con actas y coaliciones.",
        "coalitionBlock": True,
        "modifiers": {"decisionSpeed": 1, "statDriftMultiplier": 1,
                      "gdpGrowthBonus": 0.02, "diplomacyEventFreq": 0.2},
    },
    {
        "id": "KING_ABSOLUTE",
        "labels": {"male": "Rey", "female": "Reina", "neutral": "La Corona"},
        "flavorText": "La voluntad real es ley.",
        "sanctionRiskBase": 0.05,
        "modifiers": {"decisionSpeed": 1.2, "statDriftMultiplier": 1.1,
                      "corruptionDrift": 0.02, "reputationGrowthPenalty": 0.05},
    },
    {
        "id": "DICTATOR",
        "labels": {"male": "Dictador", "female": "Dictadora", "neutral": "El Regimen"},
        "flavorText": "Decisiones rapidas, memoria corta.",
        "sanctionRiskBase": 0.1,
        "crisisSeverity": 0.2,
        "lowHappinessCrisisBoost": 0.3,
        "modifiers": {"decisionSpeed": 1.4, "statDriftMultiplier": 1.2,
                      "corruptionDrift": 0.04, "institutionalTrustDrift": -0.03,
                      "reputationDrift": -0.02, "protestRisk": 0.2},
    },
    {
        "id": "SUPREME_LEADER",
        "labels": {"male": "Lider Supremo", "female": "Lider Suprema",
                   "neutral": "Liderazgo Supremo"},
        "flavorText": "El culto a la personalidad cotiza en bolsa.",
        "sanctionRiskBase": 0.1,
        "crisisSeverity": 0.15,
        "modifiers": {"decisionSpeed": 1.3, "statDriftMultiplier": 1.1,
                      "stabilityDrift": 0.02, "reputationDrift": -0.03,
                      "protestRisk": 0.1},
    },
    {
        "id": "DICTATORSHIP",
        "labels": {"male": "Jefe de la Dictadura", "female": "Jefa de la Dictadura",
                   "neutral": "La Dictadura"},
        "flavorText": "Una junta, muchas medallas.",
        "sanctionRiskBase": 0.15,
        "crisisSeverity": 0.25,
        "lowHappinessCrisisBoost": 0.2,
        "modifiers": {"decisionSpeed": 1.2, "statDriftMultiplier": 1.2,
                      "corruptionDrift": 0.05, "institutionalTrustDrift": -0.04,
                      "protestRisk": 0.25},
    },
]


# ─────────────────────────────────────────────────────
# LEVEL 1 INDUSTRIES
# ─────────────────────────────────────────────────────

INDUSTRIES = [
    {"id": "AGRICULTURE", "label": "Agricultura",
     "description": "Campos, cosechas y ferias de pueblo.",
     "incomeMult": 1.0, "resourceDrain": 0.01, "environmentalDrift": 0.01,
     "reputationDrift": 0, "stabilityDrift": 0.01, "innovationDrift": 0,
     "energyDemand": 0.01, "climateSensitivity": 0.4},
    {"id": "EXTRACTION", "label": "Extraccion",
     "description": "Minas, pozos y camiones pesados.",
     "incomeMult": 1.1, "resourceDrain": 0.04, "environmentalDrift": 0.05,
     "reputationDrift": -0.01, "stabilityDrift": 0, "innovationDrift": 0,
     "energyDemand": 0.03, "climateSensitivity": 0.2},
    {"id": "LIGHT_MANUFACTURING", "label": "Manufactura ligera",
     "description": "Talleres y fabricas de todo un poco.",
     "incomeMult": 1.05, "resourceDrain": 0.02, "environmentalDrift": 0.03,
     "reputationDrift": 0, "stabilityDrift": 0, "innovationDrift": 0.01,
     "energyDemand": 0.04, "climateSensitivity": 0.1},
    {"id": "SERVICES", "label": "Servicios",
     "description": "Comercio, turismo y oficinas con cafe.",
     "incomeMult": 1.03, "resourceDrain": 0, "environmentalDrift": 0,
     "reputationDrift": 0.01, "stabilityDrift": 0, "innovationDrift": 0.01,
     "energyDemand": 0.01, "climateSensitivity": 0.1},
    {"id": "TECHNOLOGY", "label": "Tecnologia",
     "description": "Startups, servidores y presentaciones.",
     "incomeMult": 1.02, "resourceDrain": 0, "environmentalDrift": 0.01,
     "reputationDrift": 0.01, "stabilityDrift": 0, "innovationDrift": 0.04,
     "energyDemand": 0.03, "climateSensitivity": 0},
    {"id": "SECURITY_DEFENSE_ABSTRACT", "label": "Seguridad y defensa",
     "description": "Cuarteles, uniformes y desfiles.",
     "incomeMult": 1.0, "resourceDrain": 0.01, "environmentalDrift": 0.01,
     "reputationDrift": -0.01, "stabilityDrift": 0.03, "innovationDrift": 0.01,
     "energyDemand": 0.02, "climateSensitivity": 0},
]


# ─────────────────────────────────────────────────────
# LEVEL 1 PROJECTS
# ─────────────────────────────────────────────────────

PROJECTS = [
    {"id": "P1_ROADS", "name": "Red de caminos rurales", "phase": 1,
     "description": "Conecta pueblos y mercados.",
     "cost": 120, "durationTicks": 40,
     "effects": {"gdp": 60, "employment": 3, "happiness": 2}},
    {"id": "P1_HEALTH_POSTS", "name": "Postas de salud", "phase": 1,
     "description": "Atencion basica en cada barrio.",
     "cost": 140, "durationTicks": 45,
     "effects": {"happiness": 5, "stability": 2, "institutionalTrust": 2}},
    {"id": "P1_SCHOOLS", "name": "Escuelas tecnicas", "phase": 1,
     "description": "Oficios para la nueva economia.",
     "cost": 160, "durationTicks": 50,
     "effects": {"innovation": 5, "employment": 2, "inequality": -2}},
    {"id": "P1_MARKET_REFORM", "name": "Reforma de mercados", "phase": 1,
     "description": "Ferias ordenadas y permisos simples.",
     "cost": 110, "durationTicks": 35,
     "effects": {"gdp": 40, "corruption": -3, "tourismIndex": 3}},
    {"id": "P2_AUDIT_OFFICE", "name": "Contraloria", "phase": 2,
     "description": "Control del gasto y capacidad administrativa.",
     "cost": 220, "durationTicks": 60,
     "requirements": {"minInstitutionalTrust": 40},
     "effects": {"corruption": -6, "institutionalTrust": 4, "adminUnlocked": 1}},
    {"id": "P2_PROCUREMENT", "name": "Compras publicas digitales", "phase": 2,
     "description": "Licitaciones abiertas y trazables.",
     "cost": 200, "durationTicks": 50, "adminCost": 3,
     "effects": {"corruption": -5, "treasury": 60, "admin": 2}},
    {"id": "P2_REVENUE_AGENCY", "name": "Agencia de recaudacion", "phase": 2,
     "description": "Menos evasion, mas caja.",
     "cost": 260, "durationTicks": 60, "adminCost": 4,
     "requirements": {"minStability": 40},
     "effects": {"agencyRevenue": 1, "institutionalTrust": 1}},
    {"id": "P2_PORT", "name": "Puerto comercial", "phase": 2,
     "description": "Muelles nuevos y gruas prestadas.",
     "cost": 300, "durationTicks": 70,
     "effects": {"gdp": 120, "tourismCapacity": 10, "environmentalImpact": 4}},
    {"id": "P3_AUTOMATED_COLLECTION", "name": "Recaudacion automatizada", "phase": 3,
     "description": "Cobro electronico sin ventanillas.",
     "cost": 340, "durationTicks": 70, "adminCost": 6,
     "effects": {"treasury": 120, "corruption": -4, "offlineIncomeBonus": 0.25}},
    {"id": "P3_INSPECTION_AGENCY", "name": "Agencia de inspeccion", "phase": 3,
     "description": "Inspectores con tablet y paciencia.",
     "cost": 320, "durationTicks": 65, "adminCost": 5,
     "effects": {"agencyInspection": 1, "environmentalImpact": -4}},
    {"id": "P3_TECH_PARK", "name": "Parque tecnologico", "phase": 3,
     "description": "Incubadora con wifi estable.",
     "cost": 380, "durationTicks": 80,
     "requirements": {"minInnovation": 45},
     "effects": {"innovation": 8, "gdp": 150, "energy": -3}},
    {"id": "P3_EMERGENCY_FUND", "name": "Fondo de emergencia", "phase": 3,
     "description": "Reservas para dias grises.",
     "cost": 300, "durationTicks": 50,
     "effects": {"emergencyPlanUnlocked": 1, "stability": 3}},
    {"id": "P4_PROMOTION_AGENCY", "name": "Agencia de promocion", "phase": 4,
     "description": "Marca pais en cada feria internacional.",
     "cost": 420, "durationTicks": 80,
     "requirements": {"minReputation": 45},
     "effects": {"agencyPromotion": 1, "tourismIndex": 8, "reputation": 4}},
    {"id": "P4_TRADE_TREATIES", "name": "Tratados comerciales", "phase": 4,
     "description": "Aranceles bajos y fotos con apreton de manos.",
     "cost": 450, "durationTicks": 90,
     "effects": {"treatiesUnlocked": 1, "gdp": 200, "reputation": 3}},
]


# ─────────────────────────────────────────────────────
# LEVEL 1 EVENTS
# ─────────────────────────────────────────────────────

EVENTS = [
    {
        "id": "E_TRANSPORT_STRIKE", "title": "Paro de transporte",
        "description": "Choferes y conductores paralizan la capital.",
        "tags": ["crisis"], "weight": 1.2, "cooldownTicks": 200,
        "options": [
            {"id": "NEGOTIATE", "text": "Negociar un bono",
             "effects": {"treasuryDelta": -60, "happinessDelta": 3}},
            {"id": "HOLD", "text": "Mantener la postura",
             "effects": {"stabilityDelta": -4, "happinessDelta": -3},
             "news": "{{roleTitle}} {{leaderName}} no cede ante el paro."},
        ],
    },
    {
        "id": "E_FLOOD", "title": "Inundaciones costeras",
        "description": "Una marejada entra a los barrios bajos.",
        "tags": ["climate", "crisis"], "cooldownTicks": 300,
        "conditions": {"geographyIn": ["coastal", "archipelago"]},
        "options": [
            {"id": "REBUILD", "text": "Reconstruir con diques",
             "effects": {"treasuryDelta": -90, "stabilityDelta": 2, "employmentDelta": 2}},
            {"id": "RELOCATE", "text": "Reubicar familias",
             "effects": {"treasuryDelta": -40, "happinessDelta": -2},
             "modifiers": [{"statGte": {"institutionalTrust": 60}, "mult": 0.5}]},
        ],
    },
    {
        "id": "E_SANCTIONS", "title": "Amenaza de sanciones",
        "description": "Socios comerciales cuestionan tus decisiones.",
        "tags": ["sanction", "diplomacy"], "cooldownTicks": 300,
        "maxReputation": 60,
        "options": [
            {"id": "CONCEDE", "text": "Hacer concesiones",
             "effects": {"reputationDelta": 4, "stabilityDelta": -2}},
            {"id": "DEFY", "text": "Desafiar a los socios",
             "effects": {"reputationDelta": -5, "gdpDelta": -40, "stabilityDelta": 2}},
        ],
    },
    {
        "id": "E_TRADE_TALKS", "title": "Ronda de negociaciones",
        "description": "Un bloque vecino ofrece un acuerdo parcial.",
        "tags": ["negotiation"], "cooldownTicks": 250, "phaseMin": 2,
        "options": [
            {"id": "SIGN", "text": "Firmar el acuerdo",
             "effects": {"gdpDelta": 50, "reputationDelta": 2, "inequalityDelta": 1}},
            {"id": "WAIT", "text": "Esperar mejores terminos",
             "effects": {"reputationDelta": -1},
             "followUpEventId": "E_TRADE_ULTIMATUM"},
        ],
    },
    {
        "id": "E_TRADE_ULTIMATUM", "title": "Ultimatum comercial",
        "description": "El bloque vecino exige una respuesta final.",
        "tags": ["negotiation"], "weight": 0,
        "options": [
            {"id": "ACCEPT", "text": "Aceptar terminos duros",
             "effects": {"gdpDelta": 30, "stabilityDelta": -1}},
            {"id": "WALK_AWAY", "text": "Abandonar la mesa",
             "effects": {"reputationDelta": -3, "happinessDelta": 1}},
        ],
    },
    {
        "id": "E_SUMMIT", "title": "Cumbre regional",
        "description": "Te invitan a una foto de familia con mandatarios.",
        "tags": ["diplomacy"], "cooldownTicks": 200,
        "options": [
            {"id": "ATTEND", "text": "Asistir con comitiva",
             "effects": {"treasuryDelta": -30, "reputationDelta": 4}},
            {"id": "SKIP", "text": "Enviar un video",
             "effects": {"reputationDelta": -1}},
        ],
    },
    {
        "id": "E_CORRUPTION_LEAK", "title": "Filtracion de contratos",
        "description": "Un diario publica sobreprecios en obras.",
        "tags": ["crisis"], "cooldownTicks": 220, "minCorruption": 40,
        "options": [
            {"id": "PROSECUTE", "text": "Llevar a tribunales",
             "effects": {"corruptionDelta": -5, "stabilityDelta": -2, "trustDelta": 3}},
            {"id": "DENY", "text": "Negarlo todo",
             "effects": {"trustDelta": -5, "reputationDelta": -2}},
        ],
    },
    {
        "id": "E_TOURISM_WAVE", "title": "Ola turistica",
        "description": "Un influencer descubre tus playas.",
        "tags": ["opportunity"], "cooldownTicks": 180,
        "conditions": {"statGte": {"tourismIndex": 15}},
        "options": [
            {"id": "EXPAND", "text": "Ampliar hoteles",
             "effects": {"treasuryDelta": -50, "tourismCapacityDelta": 8}},
            {"id": "TAX", "text": "Cobrar tasa turistica",
             "effects": {"treasuryDelta": 40, "tourismIndexDelta": -3}},
        ],
    },
    {
        "id": "E_MINE_COLLAPSE", "title": "Derrumbe en una mina",
        "description": "Mineros atrapados y camaras en la entrada.",
        "tags": ["crisis"], "cooldownTicks": 300,
        "requiredIndustryId": "EXTRACTION",
        "options": [
            {"id": "RESCUE", "text": "Rescate a toda costa",
             "effects": {"treasuryDelta": -80, "happinessDelta": 4, "reputationDelta": 2}},
            {"id": "MINIMIZE", "text": "Minimizar el incidente",
             "effects": {"trustDelta": -4, "stabilityDelta": -2},
             "followUpEventId": "E_MINE_INQUIRY"},
        ],
    },
    {
        "id": "E_MINE_INQUIRY", "title": "Comision investigadora",
        "description": "El congreso exige explicaciones por el derrumbe.",
        "tags": ["crisis"], "weight": 0,
        "options": [
            {"id": "COOPERATE", "text": "Colaborar con la comision",
             "effects": {"trustDelta": 2, "corruptionDelta": -2}},
            {"id": "OBSTRUCT", "text": "Obstruir",
             "effects": {"trustDelta": -4, "reputationDelta": -3}},
        ],
    },
    {
        "id": "E_DEBT_ALARM", "title": "Alarma de deuda",
        "description": "Una calificadora baja tu nota.",
        "tags": ["crisis"], "cooldownTicks": 250,
        "conditions": {"debtToGdpGte": 0.5},
        "options": [
            {"id": "AUSTERITY", "text": "Recortar gasto",
             "effects": {"debtDelta": -80, "happinessDelta": -4}},
            {"id": "REFINANCE", "text": "Refinanciar",
             "effects": {"debtDelta": 30, "treasuryDelta": 60}},
        ],
    },
    {
        "id": "E_DROUGHT", "title": "Sequia prolongada",
        "description": "Los embalses muestran el fondo.",
        "tags": ["climate"], "cooldownTicks": 300,
        "conditions": {"resourcesLte": 80},
        "options": [
            {"id": "RATION", "text": "Racionar agua",
             "effects": {"resourcesDelta": 10, "happinessDelta": -3}},
            {"id": "IMPORT", "text": "Importar agua",
             "effects": {"treasuryDelta": -70, "resourcesDelta": 15},
             "modifiers": {"industryIn": ["agriculture"], "mult": 1.2}},
        ],
    },
]


# ─────────────────────────────────────────────────────
# LEVEL 1 DECREES
# ─────────────────────────────────────────────────────

DECREES = [
    {"id": "DEC_STIMULUS", "name": "Estimulo fiscal",
     "description": "Gasto rapido para mover la economia.",
     "durationTicks": 60, "cooldownTicks": 120, "cost": {"treasury": -50},
     "modifiers": {"incomeMult": 0.95, "growthBonus": 0.05, "happinessDrift": 0.02}},
    {"id": "DEC_AUSTERITY", "name": "Austeridad",
     "description": "Caja hoy, malestar manana.",
     "durationTicks": 60, "cooldownTicks": 120, "cost": {"happiness": -2},
     "modifiers": {"incomeMult": 1.1, "happinessDrift": -0.05}},
    {"id": "DEC_ANTICORRUPTION", "name": "Cruzada anticorrupcion",
     "description": "Auditorias sorpresa en todos los ministerios.",
     "durationTicks": 80, "cooldownTicks": 160, "cost": {"treasury": -40},
     "modifiers": {"corruptionDrift": -0.05, "institutionalTrustDrift": 0.03}},
    {"id": "DEC_NATIONAL_UNITY", "name": "Unidad nacional",
     "description": "Cadena nacional y bandera en cada balcon.",
     "durationTicks": 50, "cooldownTicks": 150, "cost": {"treasury": -30},
     "modifiers": {"stabilityDrift": 0.05, "reputationDrift": 0.02}},
]


# ─────────────────────────────────────────────────────
# ECONOMY
# ─────────────────────────────────────────────────────

ECONOMY = {
    "tickMs": 5000,
    "offlineCapHours": 8,
    "incomeScale": 0.08,
    "spendingScale": 0.01,
    "gdpGrowthScale": 0.01,
    "statDriftScale": 0.05,
    "collectionEfficiencyBase": 0.85,
    "evasionBase": 0.15,
    "eventBaseChance": 0.08,
    "eventCooldownTicks": 40,
    "projectCostCurve": 1.0,
    "resourceUseBase": 0.02,
    "resourceUseIndustryBoost": 0.03,
    "resourceGrowthPenalty": 0.5,
    "debtInterestRate": 0.0005,
    "securityReputationPenalty": 0.05,
    "extractionBaseYield": 0.06,
    "industryDiversificationWeight": 0.5,
    "minimumRevenue": {"phase1Scale": 0.006, "floor": 4},
    "baseDrifts": {"happiness": 0, "stability": 0, "corruption": 0, "reputation": 0},
    "phaseThresholds": {
        "phase2": {"gdp": 1500, "stability": 45, "trust": 45, "projects": 2},
        "phase3": {"gdp": 2500, "stability": 50, "trust": 50, "projects": 5},
        "phase4": {"gdp": 4000, "stability": 55, "trust": 55, "projects": 8},
    },
    "agencies": {
        "revenue": {"incomeMult": 1.1, "evasionReduction": 0.05},
        "inspection": {"corruptionDrift": -0.05, "environmentalDrift": -0.05},
        "promotion": {"reputationDrift": 0.03, "growthBonus": 0.02},
    },
    "treaties": {"incomeMult": 1.05, "reputationDrift": 0.02},
    "startingState": {
        "treasury": 300, "gdp": 1000, "growthPct": 1.5,
        "happiness": 55, "stability": 55, "institutionalTrust": 50,
        "corruption": 30, "resources": 100, "reputation": 50, "debt": 0,
        "employment": 60, "energy": 55, "innovation": 45, "inequality": 45,
        "environmentalImpact": 35, "tourismIndex": 10, "tourismCapacity": 12,
        "tourismPressure": 5, "taxLevel": "MED",
        "budget": {"industryPct": 34, "welfarePct": 33, "securityDiplomacyPct": 33},
    },
    "decrees": DECREES,
}


POLICY_PRESETS = [
    {"id": "BALANCED", "name": "Equilibrado",
     "description": "Un poco de todo, nada en exceso.",
     "budget": {"industryPct": 34, "welfarePct": 33, "securityDiplomacyPct": 33},
     "adjustments": {}},
    {"id": "GROWTH_FIRST", "name": "Crecimiento primero",
     "description": "Fabricas hoy, hospitales despues.",
     "budget": {"industryPct": 50, "welfarePct": 25, "securityDiplomacyPct": 25},
     "adjustments": {"gdp": 80, "happiness": -4, "environmentalImpact": 5}},
    {"id": "WELFARE_STATE", "name": "Estado de bienestar",
     "description": "La felicidad tambien cotiza.",
     "budget": {"industryPct": 25, "welfarePct": 50, "securityDiplomacyPct": 25},
     "adjustments": {"happiness": 6, "treasury": -40, "inequality": -4}},
    {"id": "IRON_FIST", "name": "Mano dura",
     "description": "Orden primero, preguntas despues.",
     "budget": {"industryPct": 30, "welfarePct": 20, "securityDiplomacyPct": 50},
     "adjustments": {"stability": 8, "reputation": -6, "institutionalTrust": -3}},
]


IAP_CONFIG = {
    "projectSpeedCost": 1,
    "eventMitigationCost": 1,
    "offlineCapBoostCost": 2,
    "offlineCapBoostHours": 4,
    "carbonCreditsCost": 2,
    "carbonCreditsReduction": 50,
    "tokenTreasuryPrice": 10000,
    "rescueTreasuryAmount": 200,
    "autoBalanceCost": 3,
    "reportClarityCost": 2,
}


REMOTE_CONFIG_DEFAULTS = {
    "event_frequency": 0.08,
    "crisis_thresholds": {"happiness": 40, "stability": 40, "trust": 40},
    "project_cost_multiplier_by_phase": {"1": 1, "2": 1, "3": 1, "4": 1},
    "tax_elasticity": 0.1,
    "happiness_tax_penalty": 0.5,
    "offline_cap_hours": 8,
    "mandate_role_weights": {
        "PRESIDENT": 3, "PRIME_MINISTER": 2, "KING_PARLIAMENT": 1,
        "CHANCELLOR": 1, "KING_ABSOLUTE": 1, "DICTATOR": 1,
        "SUPREME_LEADER": 0.5, "DICTATORSHIP": 0.5,
    },
}


# ─────────────────────────────────────────────────────
# LEVEL 2 INDUSTRIES
# ─────────────────────────────────────────────────────

LEVEL2_INDUSTRIES = [
    {"id": "L2_AGRO_PRECISION", "name": "Agro de precision", "group": "primario",
     "description": "Drones sobre cultivos y sensores en el suelo.",
     "tags": ["agro", "food", "rural"],
     "attributes": {"capex": 12, "opex": 0.3},
     "modifiers": {"incomeMult": 0.9, "baseGrowthAddPct": 0.004,
                   "inflationPressureAdd": -0.0005, "pollutionAdd": 0.002},
     "unlock": {"minPhaseL2": 1}},
    {"id": "L2_ADV_MANUFACTURING", "name": "Manufactura avanzada", "group": "secundario",
     "description": "Robots, moldes y exportacion.",
     "tags": ["industry", "automation", "exports"],
     "attributes": {"capex": 20, "opex": 0.5},
     "modifiers": {"incomeMult": 1.2, "baseGrowthAddPct": 0.006,
                   "inflationPressureAdd": 0.001, "pollutionAdd": 0.006},
     "unlock": {"minPhaseL2": 1}},
    {"id": "L2_DIGITAL_SERVICES", "name": "Servicios digitales", "group": "terciario",
     "description": "Software, fintech y soporte remoto.",
     "tags": ["software", "finance", "services"],
     "attributes": {"capex": 15, "opex": 0.35},
     "modifiers": {"incomeMult": 1.1, "baseGrowthAddPct": 0.007,
                   "inflationPressureAdd": 0.0005, "pollutionAdd": 0},
     "unlock": {"minPhaseL2": 1}},
    {"id": "L2_RENEWABLE_ENERGY", "name": "Energia renovable", "group": "secundario",
     "description": "Parques solares y eolicos.",
     "tags": ["green", "grid", "energy"],
     "attributes": {"capex": 22, "opex": 0.3},
     "modifiers": {"incomeMult": 0.95, "baseGrowthAddPct": 0.005,
                   "inflationPressureAdd": -0.001, "pollutionAdd": -0.004},
     "unlock": {"minPhaseL2": 2}},
    {"id": "L2_BIOTECH_HEALTH", "name": "Biotecnologia y salud", "group": "terciario",
     "description": "Laboratorios, patentes y vacunas.",
     "tags": ["health", "research", "science"],
     "attributes": {"capex": 25, "opex": 0.45},
     "modifiers": {"incomeMult": 1.15, "baseGrowthAddPct": 0.008,
                   "inflationPressureAdd": 0.0005, "pollutionAdd": 0.001},
     "unlock": {"minPhaseL2": 2, "requiresProjectsL2": ["L2P_RESEARCH_GRANTS"]}},
    {"id": "L2_LOGISTICS_HUB", "name": "Hub logistico", "group": "terciario",
     "description": "Bodegas, trenes y contenedores.",
     "tags": ["trade", "transport", "infra"],
     "attributes": {"capex": 18, "opex": 0.4},
     "modifiers": {"incomeMult": 1.05, "baseGrowthAddPct": 0.005,
                   "inflationPressureAdd": 0.0008, "pollutionAdd": 0.004},
     "unlock": {"minPhaseL2": 1}},
    {"id": "L2_BLUE_ECONOMY", "name": "Economia azul", "group": "primario",
     "description": "Pesca sostenible, puertos y cruceros.",
     "tags": ["ocean", "tourism", "ports"],
     "attributes": {"capex": 16, "opex": 0.35},
     "modifiers": {"incomeMult": 1.0, "baseGrowthAddPct": 0.004,
                   "inflationPressureAdd": 0.0005, "pollutionAdd": 0.003},
     "unlock": {"minPhaseL2": 1}},
    {"id": "L2_DEFENSE_CYBER", "name": "Defensa y ciberseguridad", "group": "terciario",
     "description": "Firewalls con uniforme.",
     "tags": ["security", "cyber", "defense"],
     "attributes": {"capex": 24, "opex": 0.5},
     "modifiers": {"incomeMult": 0.9, "baseGrowthAddPct": 0.003,
                   "inflationPressureAdd": 0.0008, "pollutionAdd": 0.001},
     "unlock": {"minPhaseL2": 2}},
    {"id": "L2_CULTURAL_PREMIUM", "name": "Cultura premium", "group": "terciario",
     "description": "Festivales, patrimonio y series de exportacion.",
     "tags": ["heritage", "tourism", "creative"],
     "attributes": {"capex": 14, "opex": 0.3},
     "modifiers": {"incomeMult": 1.0, "baseGrowthAddPct": 0.004,
                   "inflationPressureAdd": 0.0003, "pollutionAdd": 0.001},
     "unlock": {"minPhaseL2": 1}},
]


LEVEL2_ADVISORS = [
    {"id": "ADV_ECONOMY", "name": "Asesoria economica"},
    {"id": "ADV_SOCIAL", "name": "Asesoria social"},
    {"id": "ADV_GREEN", "name": "Asesoria ambiental"},
    {"id": "ADV_SECURITY", "name": "Asesoria de seguridad"},
]


# ─────────────────────────────────────────────────────
# LEVEL 2 PROJECTS
# ─────────────────────────────────────────────────────

LEVEL2_PROJECTS = [
    {"id": "L2P_FISCAL_RULE", "name": "Regla fiscal", "phase": 1,
     "description": "Techo de gasto con letra chica.",
     "cost": 150, "durationTicks": 40, "impactScore": 2,
     "effects": {"debt": -100, "institutionalTrust": 3, "inflationPct": -0.1}},
    {"id": "L2P_RESEARCH_GRANTS", "name": "Fondos de investigacion", "phase": 1,
     "description": "Becas y laboratorios compartidos.",
     "cost": 180, "durationTicks": 45, "impactScore": 2,
     "effects": {"innovation": 6, "reputation": 2}},
    {"id": "L2P_SOCIAL_HOUSING", "name": "Vivienda social", "phase": 1,
     "description": "Barrios nuevos con plaza incluida.",
     "cost": 200, "durationTicks": 50, "impactScore": 3,
     "requirements": {"requiresAdvisorIds": ["ADV_SOCIAL", "ADV_ECONOMY"]},
     "effects": {"happiness": 6, "inequality": -5, "inflationPct": 0.05}},
    {"id": "L2P_INDUSTRIAL_PARK", "name": "Parque industrial", "phase": 1,
     "description": "Galpones, subestacion y acceso ferroviario.",
     "cost": 220, "durationTicks": 55, "impactScore": 3,
     "requirements": {"requiresIndustries": ["L2_ADV_MANUFACTURING"]},
     "effects": {"gdp": 200, "employment": 4, "environmentalImpact": 3}},
    {"id": "L2P_CENTRAL_BANK_AUTONOMY", "name": "Autonomia del banco central", "phase": 1,
     "description": "El banco central deja de atender llamadas.",
     "cost": 160, "durationTicks": 40, "impactScore": 2,
     "requirements": {"requiresCentralBankAction": True},
     "effects": {"inflationPct": -0.3, "institutionalTrust": 4}},
    {"id": "L2P_SMART_GRID", "name": "Red inteligente", "phase": 2,
     "description": "Medidores que hablan entre si.",
     "cost": 260, "durationTicks": 60, "impactScore": 3,
     "requirements": {"minPhaseL2": 2, "requiresIndustries": ["L2_RENEWABLE_ENERGY"]},
     "effects": {"energy": 10, "environmentalImpact": -5}},
    {"id": "L2P_FREE_TRADE_ZONE", "name": "Zona franca", "phase": 2,
     "description": "Aduana express y galpones con bandera.",
     "cost": 280, "durationTicks": 60, "impactScore": 3,
     "requirements": {"minPhaseL2": 2, "requiresIndustries": ["L2_LOGISTICS_HUB"]},
     "effects": {"gdp": 250, "treasury": 80, "inequality": 2}},
    {"id": "L2P_COASTAL_RESTORATION", "name": "Restauracion costera", "phase": 2,
     "description": "Manglares, dunas y playas limpias.",
     "cost": 240, "durationTicks": 55, "impactScore": 2,
     "requirements": {"minPhaseL2": 2, "requiresAdvisorIds": ["ADV_GREEN"]},
     "effects": {"environmentalImpact": -8, "tourismIndex": 5, "reputation": 3}},
    {"id": "L2P_CIVIL_SERVICE_REFORM", "name": "Reforma del servicio civil", "phase": 2,
     "description": "Concursos publicos y menos padrinos.",
     "cost": 220, "durationTicks": 50, "impactScore": 3,
     "requirements": {"minPhaseL2": 2, "requiresProjects": ["L2P_FISCAL_RULE"]},
     "effects": {"corruption": -8, "admin": 5, "institutionalTrust": 3}},
    {"id": "L2P_DIGITAL_ID", "name": "Identidad digital", "phase": 3,
     "description": "Un carnet en el telefono para todo.",
     "cost": 300, "durationTicks": 60, "impactScore": 3,
     "requirements": {"minPhaseL2": 3},
     "effects": {"innovation": 6, "corruption": -4, "treasury": 60}},
    {"id": "L2P_HIGH_SPEED_RAIL", "name": "Tren rapido", "phase": 3,
     "description": "Dos ciudades, cuarenta minutos.",
     "cost": 420, "durationTicks": 90, "impactScore": 4,
     "requirements": {"minPhaseL2": 3},
     "effects": {"gdp": 400, "employment": 5, "environmentalImpact": -2, "inflationPct": 0.1}},
    {"id": "L2P_NATIONAL_BRAND", "name": "Marca pais", "phase": 3,
     "description": "Logo, jingle y embajadores famosos.",
     "cost": 260, "durationTicks": 50, "impactScore": 2,
     "requirements": {"minPhaseL2": 3},
     "effects": {"reputation": 8, "tourismIndex": 6}},
    {"id": "L2P_SOVEREIGN_FUND", "name": "Fondo soberano", "phase": 3,
     "description": "Ahorro para la proxima resaca.",
     "cost": 350, "durationTicks": 70, "impactScore": 3,
     "requirements": {"minPhaseL2": 3, "requiresProjects": ["L2P_FISCAL_RULE"]},
     "effects": {"debt": -200, "stability": 4, "inflationPct": -0.2}},
]


# ─────────────────────────────────────────────────────
# LEVEL 2 DECREES (by regime group)
# ─────────────────────────────────────────────────────

LEVEL2_DECREES = {
    "democracy": [
        {"id": "DEC_CALL_ELECTIONS", "title": "Llamar a elecciones",
         "body": "Convoca a la ciudadania y renueva el mandato.",
         "cooldownTicks": 600, "cost": {"treasury": 100}, "effects": {},
         "action": "CALL_ELECTIONS", "summary": "Elecciones convocadas."},
        {"id": "DEC_SOCIAL_PACT", "title": "Pacto social",
         "body": "Acuerdo amplio para calmar tensiones.",
         "cooldownTicks": 240, "cost": {"treasury": 140},
         "effects": {"happiness": 8, "institutionalTrust": 6, "inequality": -8,
                     "stability": 2, "inflationPct": 0.1},
         "summary": "Se firma un pacto amplio con sindicatos y empresas."},
        {"id": "DEC_POLICE_REFORM", "title": "Reforma policial",
         "body": "Reestructura y mejora los protocolos.",
         "cooldownTicks": 240, "cost": {"treasury": 90},
         "effects": {"stability": 6, "corruption": -6, "reputation": 1, "happiness": -2},
         "summary": "Se anuncia una reforma con control civil."},
        {"id": "DEC_TRANSPARENCY", "title": "Transparencia",
         "body": "Publica datos y reduce discrecionalidad.",
         "cooldownTicks": 200, "cost": {"treasury": 60},
         "effects": {"corruption": -10, "institutionalTrust": 6, "reputation": 3,
                     "stability": -1},
         "summary": "Se abren contratos y licitaciones al publico."},
        {"id": "DEC_ANTI_INFLATION_PROGRAM", "title": "Programa anti-inflacion",
         "body": "Paquete de medidas para bajar precios.",
         "cooldownTicks": 180, "cost": {"treasury": 80},
         "effects": {"inflationPct": -0.6, "institutionalTrust": 1, "growthPct": -0.08},
         "summary": "Se lanza un programa con metas duras."},
        {"id": "DEC_DIGITALIZATION", "title": "Digitalizacion",
         "body": "Moderniza tramites y reduce tiempos.",
         "cooldownTicks": 260, "cost": {"treasury": 120}, "requires": {"minPhase": 2},
         "effects": {"innovation": 8, "corruption": -3, "treasury": 40},
         "summary": "Se digitaliza el estado con ventanillas nuevas."},
        {"id": "DEC_ENERGY_EFFICIENCY", "title": "Eficiencia energetica",
         "body": "Plan nacional de ahorro y eficiencia.",
         "cooldownTicks": 240, "cost": {"treasury": 110}, "requires": {"minPhase": 2},
         "effects": {"energy": 10, "reputation": 3, "inflationPct": -0.2},
         "summary": "Se incentiva tecnologia eficiente en todo el pais."},
    ],
    "authoritarian": [
        {"id": "DEC_CURFEW", "title": "Toque de queda",
         "body": "Restringe movimientos para controlar la calle.",
         "cooldownTicks": 180, "cost": {"treasury": 40},
         "effects": {"stability": 8, "happiness": -6, "reputation": -4,
                     "institutionalTrust": -3},
         "summary": "Se impone un toque de queda nacional."},
        {"id": "DEC_MEDIA_CONTROL", "title": "Control de medios",
         "body": "Centraliza mensajes y reduce criticas.",
         "cooldownTicks": 220, "cost": {"treasury": 50},
         "effects": {"stability": 4, "institutionalTrust": -6, "corruption": 4,
                     "reputation": -3},
         "summary": "Se ordena un control estricto de la informacion."},
        {"id": "DEC_STRONG_EMERGENCY", "title": "Estado de emergencia reforzado",
         "body": "Amplia poderes ejecutivos y restricciones.",
         "cooldownTicks": 300, "cost": {"treasury": 90},
         "effects": {"stability": 12, "corruption": 2, "happiness": -8, "reputation": -6},
         "summary": "Se anuncia emergencia con medidas excepcionales."},
    ],
    "neutral": [
        {"id": "DEC_EFFICIENCY_PLAN", "title": "Plan de eficiencia",
         "body": "Recorta gastos y ajusta procesos.",
         "cooldownTicks": 180, "cost": {"treasury": 60},
         "effects": {"treasury": 40, "admin": 2, "corruption": -2},
         "summary": "Se aprueba un plan de eficiencia fiscal."},
        {"id": "DEC_SYMBOLIC_WORKS", "title": "Obras simbolicas",
         "body": "Proyectos visibles para levantar el animo.",
         "cooldownTicks": 200, "cost": {"treasury": 80},
         "effects": {"happiness": 4, "stability": 1, "reputation": 1},
         "summary": "Se inauguran obras con corte de cinta."},
        {"id": "DEC_EXPERT_COMMISSION", "title": "Comision de expertos",
         "body": "Consulta tecnica para decisiones complejas.",
         "cooldownTicks": 160, "cost": {"treasury": 50},
         "effects": {"institutionalTrust": 3, "innovation": 2},
         "summary": "Se convoca a una comision tecnocratica."},
    ],
}


# ─────────────────────────────────────────────────────
# LEVEL 2 EVENTS
# ─────────────────────────────────────────────────────

def _opt(option_id, label, hint, outcome, effects):
    return {"id": option_id, "label": label, "hint": hint,
            "outcome": outcome, "effects": effects}


LEVEL2_EVENTS = [
    {"id": "L2_DROUGHT", "title": "Sequia",
     "body": "La lluvia se fue a otra agenda y el campo acusa el golpe.",
     "weight": 1.2, "minPhase": 1,
     "requires": {"industryTagsAny": ["agro", "food", "rural"]},
     "options": [
         _opt("IRRIGATION", "Invertir en riego", "Alto costo, mejora agua y estabilidad.",
              "Los canales aparecen en tiempo record.",
              {"treasury": -120, "water": 15, "stability": 3, "happiness": 2}),
         _opt("IMPORT_FOOD", "Importar alimentos", "Endeuda, calma estomagos.",
              "Los barcos llegan con cajas sin marca.",
              {"debt": 150, "treasury": -30, "happiness": 4, "reputation": -1}),
         _opt("PRAY", "Rezar y esperar", "Barato, incierto.",
              "Se organiza una cadena de rezos oficiales.",
              {"stability": -4, "happiness": -3, "inflationPct": 0.1}),
     ]},
    {"id": "L2_CROP_PEST", "title": "Plaga agricola",
     "body": "Una plaga decide comer gratis.",
     "weight": 1, "minPhase": 1,
     "requires": {"industryTagsAny": ["agro", "food", "rural"]},
     "options": [
         _opt("FUMIGATE", "Fumigar masivo", "Rapido pero contamina.",
              "Se fumiga hasta el viento.",
              {"treasury": -70, "envFootprint": 8, "jobs": 2}),
         _opt("BIO_CONTROL", "Control biologico", "Mas lento, mejora reputacion.",
              "Se liberan insectos con contrato.",
              {"treasury": -40, "reputation": 3, "innovation": 2}),
         _opt("DENY", "Negar en TV", "Nadie ve las hojas mordidas.",
              "El portavoz anuncia que es un efecto optico.",
              {"institutionalTrust": -4, "corruption": 2}),
     ]},
    {"id": "L2_FISHING_BAN", "title": "Veda inesperada",
     "body": "Los cardumenes no responden a decretos.",
     "weight": 1, "minPhase": 1,
     "requires": {"industryTagsAny": ["ocean", "ports", "tourism"]},
     "options": [
         _opt("SUBSIDY", "Subsidio a pescadores", "Calma social, costo fiscal.",
              "Los muelles cantan victoria.",
              {"treasury": -60, "happiness": 4, "jobs": 3}),
         _opt("LOOK_AWAY", "Hacer vista gorda", "Riesgo ambiental.",
              "Se pesca de noche con linternas.",
              {"corruption": 4, "envFootprint": 6, "reputation": -3}),
         _opt("RETRAIN", "Reconversion laboral", "Mas lento, mejora innovacion.",
              "Cursos express con olor a sal.",
              {"treasury": -50, "innovation": 3, "jobs": 1}),
     ]},
    {"id": "L2_ALGAL_BLOOM", "title": "Floracion algal",
     "body": "El mar se tiñe y sube el olor a titulares.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"industryTagsAny": ["ocean", "ports", "tourism"]},
     "options": [
         _opt("MONITOR", "Monitoreo y contencion", "Costoso, evita crisis.",
              "Se despliegan drones y pancartas.",
              {"treasury": -80, "stability": 2, "reputation": 2}),
         _opt("FAST_HARVEST", "Acelerar cosecha", "Caja hoy, ambiente manana.",
              "Se sella un acuerdo con olor a prisa.",
              {"treasury": 50, "envFootprint": 5, "corruption": 2}),
         _opt("TEMP_CLOSE", "Cerrar temporalmente", "Menos ingresos, mas reputacion.",
              "Se coloca un cartel de cerrado por salud.",
              {"treasury": -40, "happiness": -2, "reputation": 3}),
     ]},
    {"id": "L2_FOREST_FIRES", "title": "Incendios forestales",
     "body": "El humo domina la portada del dia.",
     "weight": 1, "minPhase": 1,
     "requires": {"industryTagsAny": ["rural", "green"]},
     "options": [
         _opt("BRIGADES", "Brigadas y prevencion", "Protege reputacion.",
              "Se compra agua hasta en latas.",
              {"treasury": -90, "stability": 2, "reputation": 2, "envFootprint": -5}),
         _opt("LET_BURN", "Dejar que arda", "Costo cero, costo politico.",
              "Se anuncia que es un ciclo natural.",
              {"stability": -6, "happiness": -4, "reputation": -4}),
         _opt("BLAME_NEIGHBOR", "Culpar al vecino", "Narrativa conveniente.",
              "Se imprime un mapa con flechas.",
              {"institutionalTrust": -3, "stability": -2}),
     ]},
    {"id": "L2_MINE_ACCIDENT", "title": "Accidente en faena",
     "body": "Un accidente en el sector industrial desata protestas.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"industryTagsAny": ["industry", "exports"]},
     "options": [
         _opt("INVESTIGATE", "Investigar y sancionar", "Mejora confianza.",
              "Se abren carpetas con polvo.",
              {"corruption": -4, "institutionalTrust": 3, "treasury": -40}),
         _opt("COVER", "Encubrir", "Riesgo reputacional.",
              "El vocero repite la misma frase.",
              {"corruption": 6, "institutionalTrust": -5, "reputation": -4, "treasury": 20}),
         _opt("MODERNIZE", "Modernizar seguridad", "Inversion alta, mejora empleo.",
              "Se anuncian cascos con sensores.",
              {"treasury": -110, "stability": 2, "jobs": 2}),
     ]},
    {"id": "L2_COMMODITY_BOOM", "title": "Boom de commodities",
     "body": "El mercado internacional paga en modo fiesta.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"industryTagsAny": ["industry", "exports", "energy"]},
     "options": [
         _opt("SOVEREIGN_FUND", "Fondo soberano", "Ahorra para la resaca.",
              "Se inaugura una cuenta con nombre elegante.",
              {"treasury": 120, "inflationPct": -0.2, "stability": 2}),
         _opt("POPULAR_SPEND", "Gastar en popularidad", "Sube felicidad, sube inflacion.",
              "Se reparten bonos con selfie.",
              {"treasury": 80, "happiness": 6, "inflationPct": 0.3}),
         _opt("ELITE_TAX_CUT", "Bajar impuestos a elites", "Mejora caja a futuro.",
              "La elite aplaude con discrecion.",
              {"reputation": -3, "inequality": 6, "corruption": 2}),
     ]},
    {"id": "L2_BLACKOUT", "title": "Corte electrico",
     "body": "La red no aguanta el pico y se apagan barrios.",
     "weight": 1.1, "minPhase": 1,
     "requires": {"industryTagsAny": ["energy", "grid", "industry", "services"]},
     "options": [
         _opt("INVEST_GRID", "Invertir en red", "Caro, mejora energia.",
              "Se promete cableado digno.",
              {"treasury": -120, "energy": 12, "stability": 2}),
         _opt("RATION", "Racionamiento", "Impopular, evita colapso.",
              "Se publica un calendario de apagones.",
              {"happiness": -3, "stability": 1, "inflationPct": 0.1}),
         _opt("BLAME_RAIN", "Culpar a la lluvia", "Narrativa facil.",
              "Se declara un fenomeno meteorologico inesperado.",
              {"institutionalTrust": -2}),
     ]},
    {"id": "L2_PORT_STRIKE", "title": "Huelga portuaria",
     "body": "Los puertos frenan y la cadena tiembla.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"industryTagsAny": ["ports", "trade", "exports"]},
     "options": [
         _opt("NEGOTIATE", "Negociar", "Costo moderado, baja tension.",
              "Se firma un acuerdo con cafe frio.",
              {"treasury": -50, "happiness": 2, "stability": 1}),
         _opt("CRACKDOWN", "Reprimir", "Sube estabilidad, cae reputacion.",
              "Se anuncia orden con casco y sirena.",
              {"stability": 3, "reputation": -5, "institutionalTrust": -3}),
         _opt("AIR_ROUTE", "Desviar por aire", "Caro, evita quiebre.",
              "Se alquilan aviones de ultimo minuto.",
              {"treasury": -90, "inflationPct": 0.1}),
     ]},
    {"id": "L2_TOURISM_BOOM", "title": "Boom turistico",
     "body": "Llegan visitantes y suben los precios.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"industryTagsAny": ["tourism", "heritage", "creative"]},
     "options": [
         _opt("INVEST_HOSPITALITY", "Invertir en hospitality", "Sube reputacion, costo alto.",
              "Se anuncia una ruta premium.",
              {"treasury": -40, "happiness": 3, "reputation": 2}),
         _opt("LET_FLOW", "Dejar organico", "Ingreso rapido.",
              "Se deja que el mercado haga magia.",
              {"treasury": 30, "reputation": 1}),
         _opt("TOURIST_FEE", "Cobrar tasa turista", "Caja extra, reputacion baja.",
              "Se imprime la tasa en folletos.",
              {"treasury": 70, "reputation": -2}),
     ]},
    {"id": "L2_CORRUPTION_SCANDAL", "title": "Escandalo de corrupcion",
     "body": "Un audio filtrado prende la mecha.",
     "weight": 1.3, "minPhase": 1,
     "options": [
         _opt("INVESTIGATE", "Investigar", "Mejora confianza, costo politico.",
              "Se abren sumarios con aplausos tibios.",
              {"corruption": -6, "institutionalTrust": 3, "stability": -1, "treasury": -40}),
         _opt("COVER_UP", "Encubrir", "Riesgo alto.",
              "Se pierde un expediente clave.",
              {"corruption": 8, "institutionalTrust": -6, "reputation": -3}),
         _opt("SCAPEGOAT", "Chivo expiatorio", "Parche rapido.",
              "Se entrega un responsable de utileria.",
              {"corruption": -2, "institutionalTrust": -2, "stability": 1}),
     ]},
    {"id": "L2_FOREIGN_INVEST_OFFER", "title": "Oferta de inversion extranjera",
     "body": "Un fondo llega con promesas y logo brillante.",
     "weight": 1, "minPhase": 2,
     "options": [
         _opt("ACCEPT_FAST", "Aceptar rapido", "Caja alta, desigualdad.",
              "Se firma en servilleta.",
              {"treasury": 120, "inequality": 5, "reputation": -1}),
         _opt("NEGOTIATE", "Negociar", "Mejor reputacion.",
              "Se negocia con cafe y traductor.",
              {"treasury": 70, "reputation": 2, "corruption": -1}),
         _opt("REJECT", "Rechazar por soberania", "Coste politico.",
              "Se emite un comunicado patriota.",
              {"reputation": 1, "treasury": -20}),
     ]},
    {"id": "L2_PROTESTS", "title": "Protestas",
     "body": "La calle se llena de pancartas.",
     "weight": 1.2, "minPhase": 1,
     "options": [
         _opt("DIALOGUE_BONUS", "Dialogo y bonos", "Sube felicidad, cuesta tesoro.",
              "Se abre mesa y cheque rapido.",
              {"treasury": -90, "happiness": 4, "institutionalTrust": 2}),
         _opt("REPRESS", "Represion", "Estabilidad corta, reputacion baja.",
              "Se declara orden con sirenas.",
              {"stability": 4, "reputation": -6, "happiness": -4}),
         _opt("MEME_PR", "PR y memes", "Absurdo, leve efecto.",
              "Se lanza un hashtag oficial.",
              {"treasury": -30, "institutionalTrust": -1, "happiness": 1}),
     ]},
    {"id": "L2_INFLATION_CRISIS", "title": "Crisis inflacionaria",
     "body": "Los precios corren mas rapido que los salarios.",
     "weight": 1, "minPhase": 1,
     "requires": {"inflationRegimesAny": ["HIGH", "HYPER"]},
     "options": [
         _opt("RAISE_RATES", "Subir tasas", "Baja inflacion, frena crecimiento.",
              "El banco central se pone serio.",
              {"inflationPct": -0.6, "stability": 1, "growthPct": -0.1}),
         _opt("PRINT", "Imprimir dinero", "Caja rapida, mas inflacion.",
              "Se enciende la imprenta de noche.",
              {"treasury": 120, "inflationPct": 0.8, "institutionalTrust": -2}),
         _opt("PRICE_PACT", "Pacto de precios", "Control parcial, riesgo corrupcion.",
              "Se firma un acuerdo con sonrisas tensas.",
              {"inflationPct": -0.2, "corruption": 2, "treasury": -40}),
     ]},
    {"id": "L2_TRADE_SANCTION", "title": "Sancion comercial",
     "body": "Un socio cierra puertas de golpe.",
     "weight": 0.8, "minPhase": 3,
     "requires": {"industryTagsAny": ["trade", "ports", "exports"]},
     "options": [
         _opt("ADJUST_POLICY", "Ajustar politica", "Recupera reputacion.",
              "Se anuncia un paquete diplomativo.",
              {"reputation": 2, "institutionalTrust": 1, "treasury": -60}),
         _opt("RESIST", "Resistir", "Mas estabilidad, menos caja.",
              "Se declara resistencia comercial.",
              {"treasury": -90, "stability": -2, "reputation": -2}),
         _opt("NEW_MARKETS", "Buscar nuevos mercados", "Innovation y reputacion.",
              "Se inicia gira relampago.",
              {"treasury": -70, "innovation": 2, "reputation": 1}),
     ]},
    {"id": "L2_CYBER_INCIDENT", "title": "Ciberincidente",
     "body": "Un ataque digital paraliza servicios clave.",
     "weight": 1, "minPhase": 2,
     "requires": {"industryTagsAny": ["software", "finance", "cyber"]},
     "options": [
         _opt("RESILIENCE", "Invertir resiliencia", "Caro, mejora innovacion.",
              "Se contrata un equipo con camisetas negras.",
              {"treasury": -120, "innovation": 4, "stability": 1}),
         _opt("PATCH", "Parche rapido", "Solucion temporal.",
              "Se reinician servidores sin anuncio.",
              {"treasury": -30, "innovation": 1, "institutionalTrust": -1}),
         _opt("BLAME_INTERN", "Culpar al becario", "Riesgo reputacional.",
              "Se entrega un culpable con credencial.",
              {"institutionalTrust": -2, "happiness": -1}),
     ]},
    {"id": "L2_COALITION_BREAKS", "title": "Coalicion se rompe",
     "body": "Los socios de gobierno se pelean en publico.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"regimesAny": ["PRIME_MINISTER", "CHANCELLOR"]},
     "options": [
         _opt("NEGOTIATE", "Negociar", "Calma politica.",
              "Se firma un acuerdo con cafe frio.",
              {"treasury": -40, "institutionalTrust": 2, "stability": 1}),
         _opt("CALL_ELECTIONS", "Llamar a elecciones", "Activa el proceso electoral.",
              "Se activa la campaña en tiempo record.",
              {"treasury": -100}),
         _opt("MINORITY", "Gobierno minoria", "Riesgo de estabilidad.",
              "Se gobierna con calculadora.",
              {"stability": -2, "corruption": 1}),
     ]},
    {"id": "L2_MEDIA_SCANDAL_ABSURD", "title": "Escandalo mediatico absurdo",
     "body": "Una noticia ridicula se vuelve viral.",
     "weight": 1.1, "minPhase": 1,
     "options": [
         _opt("PR_SPEND", "Gastar en PR", "Compra titulares.",
              "Se contrata un equipo de crisis.",
              {"treasury": -40, "reputation": 2}),
         _opt("IGNORE", "Ignorar", "Deja pasar la ola.",
              "Se finge demencia colectiva.",
              {"reputation": -1, "institutionalTrust": 1}),
         _opt("DANCE", "Responder con baile", "Sorpresa total.",
              "Se viraliza un video oficial.",
              {"happiness": 2, "institutionalTrust": -1}),
     ]},
    {"id": "L2_GENERAL_STRIKE", "title": "Huelga general",
     "body": "La produccion se detiene y sube la tension.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"industryTagsAny": ["industry", "services", "infra"]},
     "options": [
         _opt("RAISE_WAGES", "Subir salarios", "Mejora felicidad, sube inflacion.",
              "Se firma un acuerdo salarial.",
              {"treasury": -110, "happiness": 4, "inflationPct": 0.2}),
         _opt("AUTOMATE", "Automatizar", "Innovacion arriba, empleo abajo.",
              "Se anuncian robots en cadena.",
              {"innovation": 5, "jobs": -6, "happiness": -2}),
         _opt("MEDIATE", "Mediacion", "Estabilidad moderada.",
              "Se instala una mesa tripartita.",
              {"treasury": -50, "stability": 2, "institutionalTrust": 1}),
     ]},
    {"id": "L2_NEIGHBOR_TENSION", "title": "Vecino intranquilo",
     "body": "Un vecino sube el tono en la frontera.",
     "weight": 0.8, "minPhase": 3,
     "requires": {"industryTagsAny": ["defense", "security"]},
     "options": [
         _opt("DIPLOMACY", "Diplomacia", "Mejora reputacion.",
              "Se organiza una cumbre express.",
              {"reputation": 3, "institutionalTrust": 1, "treasury": -40}),
         _opt("SECURITY_SPEND", "Gasto en seguridad", "Estabilidad arriba.",
              "Se compran drones con moño.",
              {"stability": 3, "treasury": -90, "reputation": -2}),
         _opt("PROVOKE", "Provocar por deporte", "Sorpresa negativa.",
              "Se publica un mapa con emojis.",
              {"stability": -2, "reputation": -4}),
     ]},
    {"id": "L2_INTERNATIONAL_PRIZE", "title": "Premio internacional",
     "body": "Un jurado extranjero felicita al pais.",
     "weight": 0.9, "minPhase": 2,
     "options": [
         _opt("ACCEPT", "Aceptar", "Sube reputacion.",
              "Se viaja a recoger una estatuilla.",
              {"reputation": 6, "institutionalTrust": 2, "treasury": 60}),
         _opt("REJECT", "Rechazar por soberania", "Postura dura.",
              "Se devuelve el premio con carta.",
              {"reputation": 1, "happiness": 1, "treasury": -10}),
         _opt("MUSEUM", "Convertirlo en museo", "Turismo y reputacion.",
              "Se abre un museo del premio.",
              {"treasury": -40, "reputation": 3}),
     ]},
    {"id": "L2_DEFLATION_SPIRAL", "title": "Deflacion y consumo cae",
     "body": "Los precios bajan, el animo tambien.",
     "weight": 0.9, "minPhase": 2,
     "requires": {"inflationRegimesAny": ["DEFLATION"]},
     "options": [
         _opt("STIMULATE", "Estimular demanda", "Sube inflacion, sube felicidad.",
              "Se activa un plan de consumo.",
              {"treasury": -120, "happiness": 3, "inflationPct": 0.4}),
         _opt("AUSTERITY", "Austeridad", "Caja mejora, baja felicidad.",
              "Se anuncia tijera fiscal.",
              {"treasury": 40, "happiness": -3, "stability": -1}),
         _opt("TARGETED_SUBSIDY", "Subsidio focalizado", "Confianza arriba.",
              "Se crea un beneficio puntual.",
              {"treasury": -60, "institutionalTrust": 2}),
     ]},
    {"id": "L2_SUPPLY_CHAIN_SHOCK", "title": "Shock de cadena de suministro",
     "body": "Faltan insumos y sube la ansiedad.",
     "weight": 1, "minPhase": 2,
     "requires": {"industryTagsAny": ["trade", "transport", "industry"]},
     "options": [
         _opt("STRATEGIC_STOCK", "Stock estrategico", "Costoso, estabilidad arriba.",
              "Se compran contenedores de emergencia.",
              {"treasury": -90, "stability": 2}),
         _opt("NEW_SUPPLIERS", "Buscar proveedores", "Innovacion y reputacion.",
              "Se anuncia una ronda de negocios.",
              {"treasury": -60, "innovation": 1, "reputation": 1}),
         _opt("BLAME_SHIPS", "Culpar a los barcos", "Nada cambia.",
              "Se culpa a la logistica global.",
              {"institutionalTrust": -1, "happiness": -1}),
     ]},
]


# ─────────────────────────────────────────────────────
# BUNDLE
# ─────────────────────────────────────────────────────

def default_bundle() -> dict:
    """A fresh deep copy of the built-in config bundle."""
    return copy.deepcopy({
        "stateTypes": STATE_TYPES,
        "roles": ROLES,
        "industries": INDUSTRIES,
        "projects": PROJECTS,
        "events": EVENTS,
        "economy": ECONOMY,
        "policyPresets": POLICY_PRESETS,
        "iapConfig": IAP_CONFIG,
        "remoteConfigKeys": {"defaults": REMOTE_CONFIG_DEFAULTS},
        "level2Industries": LEVEL2_INDUSTRIES,
        "level2Advisors": LEVEL2_ADVISORS,
        "level2Projects": LEVEL2_PROJECTS,
        "level2Decrees": LEVEL2_DECREES,
        "level2Events": LEVEL2_EVENTS,
    })
