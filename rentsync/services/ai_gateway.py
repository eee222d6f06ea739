"""
Gateway verso il modello generativo (Gemini) / Gateway to the generative model (Gemini).

Ogni operazione costruisce il prompt, invoca il modello in un thread
(l'SDK e sincrono) e interpreta la risposta con parse_json().
Each operation builds the prompt, calls the model in a worker thread
(the SDK is synchronous) and reads the answer through parse_json().

Fallback per operazione / Per-operation fallback:
- analyze_risk solleva AIServiceError (nessun punteggio inventato)
- recommend_car -> []
- generate_marketing_copy -> messaggio di scuse
- find_leads -> LeadSearchResult con error (QUOTA_EXCEEDED / PERMISSION_DENIED / messaggio)
- generate_car_details -> suggerimento vuoto
- generate_quote_details / generate_strategic_report / generate_company_bio -> testo segnaposto
"""

import asyncio
import json
import logging
from typing import Any

from google import genai
from google.genai import types

from rentsync.config import settings
from rentsync.schemas.ai import (
    AIRecommendation,
    CarDetailsSuggestion,
    DriverProfile,
    FoundLead,
    GroundingSource,
    LeadSearchResult,
    RiskAnalysisResult,
    StrategicStats,
)
from rentsync.services.ai_parsing import parse_json

log = logging.getLogger(__name__)

QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
PERMISSION_DENIED = "PERMISSION_DENIED"

MARKETING_COPY_FALLBACK = "Non è stato possibile generare il contenuto al momento."
QUOTE_DETAILS_FALLBACK = "Descrizione non disponibile."
STRATEGIC_REPORT_FALLBACK = "Errore nell'analisi strategica."
COMPANY_BIO_FALLBACK = "Bio non disponibile."

MAX_RECOMMENDATIONS = 3


class AIServiceError(Exception):
    """Il modello non ha prodotto un risultato utilizzabile / The model produced no usable result."""


def classify_error(exc: Exception) -> str:
    """Errore SDK -> QUOTA_EXCEEDED, PERMISSION_DENIED o il messaggio.

    SDK error -> QUOTA_EXCEEDED, PERMISSION_DENIED or the raw message.
    """
    message = str(exc)
    code = getattr(exc, "code", None)
    if code == 429 or "429" in message or "RESOURCE_EXHAUSTED" in message:
        return QUOTA_EXCEEDED
    if code == 403 or "403" in message or "PERMISSION_DENIED" in message:
        return PERMISSION_DENIED
    return message or exc.__class__.__name__


# ---------------------------------------------------------------------------
# Schemi di risposta / Response schemas
# ---------------------------------------------------------------------------

RISK_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "riskScore": {"type": "INTEGER", "description": "Punteggio da 0 (alto rischio) a 100 (affidabilità perfetta)"},
        "riskLevel": {"type": "STRING", "enum": ["Basso", "Medio", "Alto"]},
        "maxCreditLimit": {"type": "INTEGER", "description": "Limite di credito suggerito in Euro"},
        "reasoning": {"type": "STRING"},
        "recommendation": {"type": "STRING"},
    },
    "required": ["riskScore", "riskLevel", "maxCreditLimit", "reasoning", "recommendation"],
}

RECOMMENDATION_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "carId": {"type": "STRING", "description": "ID dell'auto dalla flotta fornita"},
            "matchScore": {"type": "INTEGER", "description": "Compatibilità da 0 a 100"},
            "reasoning": {"type": "STRING"},
            "suggestedMonthlyRate": {"type": "INTEGER"},
            "suggestedDurationMonths": {"type": "INTEGER"},
        },
        "required": ["carId", "matchScore", "reasoning", "suggestedMonthlyRate", "suggestedDurationMonths"],
    },
}

CAR_DETAILS_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "category": {"type": "STRING", "enum": ["Economy", "SUV", "Luxury", "Van"]},
        "features": {"type": "ARRAY", "items": {"type": "STRING"}},
        "accessories": {"type": "ARRAY", "items": {"type": "STRING"}},
        "description": {"type": "STRING"},
        "pricePerDay": {"type": "NUMBER"},
        "rentalRates": {
            "type": "OBJECT",
            "properties": {
                key: {"type": "NUMBER"}
                for key in ("monthly1", "monthly3", "monthly6", "monthly12", "monthly24", "monthly48")
            },
            "required": ["monthly1", "monthly12", "monthly24", "monthly48"],
        },
        "fuelType": {"type": "STRING", "enum": ["Benzina", "Diesel", "Ibrido", "Elettrico", "GPL/Metano"]},
        "transmission": {"type": "STRING", "enum": ["Manuale", "Automatico"]},
    },
    "required": ["category", "features", "accessories", "description", "pricePerDay", "rentalRates",
                 "fuelType", "transmission"],
}


def _fleet_summary(fleet: list[Any]) -> str:
    return json.dumps([
        {
            "id": car.id,
            "model": f"{car.brand} {car.model}",
            "category": getattr(car.category, "value", car.category),
            "price": car.price_per_day,
            "features": list(car.features or []),
            "transmission": getattr(car.transmission, "value", car.transmission),
            "fuel": getattr(car.fuel_type, "value", car.fuel_type),
        }
        for car in fleet
    ], ensure_ascii=False)


def _sources_from(response: Any) -> list[GroundingSource]:
    """Fonti di grounding del primo candidato / Grounding sources of the first candidate."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []
    sources = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        if web is not None:
            sources.append(GroundingSource(title=getattr(web, "title", None), uri=getattr(web, "uri", None)))
    return sources


def simulated_leads(target: str, location: str) -> list[FoundLead]:
    """Risultati dimostrativi della modalita sandbox / Canned results for sandbox mode."""
    slug = "".join(ch for ch in target.lower() if ch.isalnum()) or "azienda"
    return [
        FoundLead(
            name=f"{target.title()} {suffix} {location}",
            interest=interest,
            location=location,
            email=f"info@{slug}{n}.example.it",
            phone=f"+39 02 555 01{n:02d}",
        )
        for n, (suffix, interest) in enumerate([
            ("Group", "Flotta di auto aziendali per le visite ai clienti."),
            ("Service", "Furgoni per consegne e trasporto attrezzatura."),
            ("Partners", "Auto di cortesia per il personale in trasferta."),
        ], start=1)
    ]


class AIGateway:
    """Client senza stato verso Gemini / Stateless client to Gemini."""

    def __init__(self, client: Any | None = None, model: str | None = None):
        self._client = client
        self.model = model or settings.GEMINI_MODEL

    @property
    def client(self) -> Any:
        if self._client is None:
            if not settings.GEMINI_API_KEY:
                raise AIServiceError("GEMINI_API_KEY non configurata")
            self._client = genai.Client(api_key=settings.GEMINI_API_KEY)
        return self._client

    async def _generate(self, prompt: str, config: types.GenerateContentConfig | None = None) -> Any:
        return await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=prompt,
            config=config,
        )

    async def _generate_text(self, prompt: str, fallback: str, temperature: float | None = None) -> str:
        config = types.GenerateContentConfig(temperature=temperature) if temperature is not None else None
        try:
            response = await self._generate(prompt, config)
        except Exception as e:
            log.warning("AI text generation failed: %s", e)
            return fallback
        return response.text or fallback

    # ------------------------------------------------------------------

    async def analyze_risk(self, client_summary: dict[str, Any], financial_notes: str) -> RiskAnalysisResult:
        """Valutazione del rischio cliente / Client risk assessment.

        Solleva AIServiceError se il modello fallisce o risponde male.
        Raises AIServiceError when the model fails or answers badly.
        """
        prompt = f"""
Agisci come un analista finanziario esperto per un'agenzia di noleggio auto.
Valuta il profilo di rischio di questo cliente per un noleggio a lungo termine o flotta aziendale.

Dati Cliente: {json.dumps(client_summary, ensure_ascii=False, default=str)}
Dati Finanziari/Note: {financial_notes}

Analizza stabilità lavorativa, debiti pregressi (se menzionati), e solidità aziendale.
Restituisci un JSON rigoroso.
"""
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RISK_SCHEMA,
            temperature=0.2,
        )
        try:
            response = await self._generate(prompt, config)
        except AIServiceError:
            raise
        except Exception as e:
            log.exception("Risk analysis call failed")
            raise AIServiceError(classify_error(e)) from e

        if not response.text:
            raise AIServiceError("Nessuna risposta dal modello")
        result = parse_json(response.text, RiskAnalysisResult)
        if not result.ok:
            log.warning("Risk analysis unreadable: %s", result.error)
            raise AIServiceError(result.error)
        return result.value

    async def recommend_car(self, fleet: list[Any], profile: DriverProfile) -> list[AIRecommendation]:
        """Fino a 3 auto della flotta data, ordinate per compatibilita.

        Up to 3 cars of the given fleet, best match first.
        """
        if not fleet:
            return []
        prompt = f"""
Agisci come un consulente esperto di mobilità (Human-like).
Analizza il profilo dettagliato del guidatore e la flotta disponibile per consigliare le 3 migliori auto.

PROFILO GUIDATORE DETTAGLIATO:
- Professione & Reddito: {profile.job}, €{profile.annual_income}/anno.
- Percorrenza: {profile.annual_km} km/anno.
- Tipo Percorso Prevalente: {profile.trip_type}.
- Nucleo Familiare: {profile.family_size}.
- Preferenza Cambio: {profile.transmission}.
- Stile Guida: {profile.driving_style}.
- Esigenze Carico: {profile.load_needs}.
- PRIORITÀ ASSOLUTA: {profile.priority}.

Flotta Disponibile (JSON):
{_fleet_summary(fleet)}

REGOLE DI MATCHING:
1. Se 'Animali Domestici' o 'Bagagli Voluminosi' -> Favorire SUV o Van.
2. Se percorso 'Urbano' -> Favorire Elettrico/Ibrido/Economy.
3. Se 'Autostrada' + km alti -> Favorire Diesel o SUV stabili.
4. Se Priorità 'Immagine/Status' -> Favorire Luxury o brand premium.
5. Se Priorità 'Risparmio' -> Favorire Economy o prezzo basso.
6. Considera il reddito per suggerire una rata sostenibile.
7. RISPETTA la preferenza del cambio se specificata.

Restituisci un array JSON con le 3 migliori opzioni, spiegando nel campo 'reasoning' perché l'auto soddisfa le abitudini indicate.
"""
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=RECOMMENDATION_SCHEMA,
            temperature=0.4,
        )
        try:
            response = await self._generate(prompt, config)
        except Exception as e:
            log.warning("Car recommendation failed: %s", e)
            return []

        result = parse_json(response.text or "[]", list[AIRecommendation])
        if not result.ok:
            log.warning("Car recommendation unreadable: %s", result.error)
            return []

        fleet_ids = {car.id for car in fleet}
        picks = [rec for rec in result.value if rec.car_id in fleet_ids]
        picks.sort(key=lambda rec: rec.match_score, reverse=True)
        return picks[:MAX_RECOMMENDATIONS]

    async def generate_marketing_copy(
        self,
        lead_name: str,
        interest: str,
        tone: str,
        offers: list[Any] | None = None,
        company: Any | None = None,
    ) -> str:
        offers_text = "\n---\n".join(
            f"VEICOLO: {car.brand} {car.model}\n"
            f"CATEGORIA: {getattr(car.category, 'value', car.category)}\n"
            f"DETTAGLI: {getattr(car.fuel_type, 'value', car.fuel_type)}, "
            f"{getattr(car.transmission, 'value', car.transmission)}, {', '.join(car.features or [])}\n"
            f"DESCRIZIONE: {car.description or ''}"
            for car in offers or []
        )
        sender = getattr(company, "name", None) or settings.APP_NAME
        prompt = f"""
Scrivi un'email commerciale persuasiva da parte di {sender}.
DESTINATARIO: {lead_name}
MOTIVO CONTATTO: "{interest}"
TONO RICHIESTO: {tone}
PROPOSTA VEICOLI:
{offers_text}

L'obiettivo è fissare una chiamata conoscitiva. Includi una call to action chiara.
"""
        return await self._generate_text(prompt, MARKETING_COPY_FALLBACK)

    async def find_leads(self, target: str, location: str, simulate: bool = False) -> LeadSearchResult:
        """Ricerca lead reali con Google Search / Real lead search with Google Search grounding.

        Con simulate=True restituisce dati dimostrativi senza chiamare il modello.
        With simulate=True returns demo data without calling the model.
        """
        if simulate:
            return LeadSearchResult(leads=simulated_leads(target, location))

        prompt = f"""
Cerca su Google aziende REALI del settore specifico "{target}" a "{location}".
Regole: Filtra rigorosamente per settore. Scrivi una motivazione strategica per il noleggio.
Restituisci ESCLUSIVAMENTE un JSON:
{{
  "leads": [
    {{ "name": "Nome", "interest": "Motivazione", "location": "Indirizzo", "email": "email", "phone": "tel" }}
  ]
}}
"""
        # Con il tool di ricerca niente response_schema / No response_schema alongside the search tool
        config = types.GenerateContentConfig(tools=[types.Tool(google_search=types.GoogleSearch())])
        try:
            response = await self._generate(prompt, config)
        except Exception as e:
            error = classify_error(e)
            log.warning("Lead search failed (%s): %s", error, e)
            return LeadSearchResult(error=error)

        result = parse_json(response.text or '{"leads": []}', LeadSearchResult)
        if not result.ok:
            log.warning("Lead search unreadable: %s", result.error)
            return LeadSearchResult(sources=_sources_from(response), error=result.error)
        return LeadSearchResult(leads=result.value.leads, sources=_sources_from(response))

    async def generate_car_details(self, brand: str, model: str, year: int | None = None) -> CarDetailsSuggestion:
        year_text = f"dell'anno {year}" if year else ""
        prompt = f"""
Dato il veicolo {brand} {model} {year_text}, fornisci una scheda tecnica completa e un piano finanziario per un'agenzia di noleggio:
1. Categoria (scegli solo tra: Economy, SUV, Luxury, Van).
2. array 'features': 5 caratteristiche tecniche chiave.
3. array 'accessories': 5 accessori o optional specifici.
4. 'description': Una descrizione accattivante (max 30 parole) orientata alla vendita.
5. 'pricePerDay': Prezzo giornaliero per noleggio breve (Euro).
6. 'rentalRates': quote mensili decrescenti per 1, 3, 6, 12, 24 e 48 mesi (monthly1 ... monthly48).
7. Tipo di Alimentazione (Benzina, Diesel, Ibrido, Elettrico, GPL/Metano).
8. Tipo di Cambio (Manuale, Automatico).
"""
        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=CAR_DETAILS_SCHEMA,
            temperature=0.3,
        )
        try:
            response = await self._generate(prompt, config)
        except Exception as e:
            log.warning("Car details generation failed: %s", e)
            return CarDetailsSuggestion()
        return parse_json(response.text, CarDetailsSuggestion).unwrap_or(CarDetailsSuggestion())

    async def generate_quote_details(self, car_model: str, days: int, client_type: str) -> str:
        prompt = (
            f"Scrivi una breve nota di accompagnamento professionale per un preventivo di noleggio "
            f"{car_model} della durata di {days} giorni per un cliente di tipo {client_type}. "
            f"Elenca 3 vantaggi del nostro servizio."
        )
        return await self._generate_text(prompt, QUOTE_DETAILS_FALLBACK)

    async def generate_strategic_report(self, stats: StrategicStats) -> str:
        prompt = f"""
Agisci come un Direttore Commerciale e Fleet Manager esperto.
Analizza le seguenti metriche dell'agenzia di noleggio relative al periodo selezionato:

METRICHE:
- Periodo Analizzato: {stats.period}
- Fatturato Totale: €{stats.revenue:.2f}
- Auto Più Noleggiate: {json.dumps(stats.top_cars, ensure_ascii=False)}
- Auto MAI Noleggiate (Ferme): {json.dumps(stats.unused_cars, ensure_ascii=False)}
- Top Agenti: {json.dumps(stats.top_agents, ensure_ascii=False)}

Genera un report strategico in formato Markdown strutturato così:
1. **Sintesi Performance**
2. **Analisi Flotta**: cosa fare con le auto ferme e su quali modelli investire.
3. **Strategia Commerciale**: feedback sugli agenti migliori e suggerimenti per il prossimo periodo.

Sii diretto, professionale e orientato al profitto.
"""
        return await self._generate_text(prompt, STRATEGIC_REPORT_FALLBACK, temperature=0.5)

    async def generate_company_bio(self, profile: Any) -> str:
        prompt = (
            f"Scrivi una bio aziendale professionale per {getattr(profile, 'name', '') or settings.APP_NAME}, "
            f"con sede a {getattr(profile, 'city', '') or 'Italia'}."
        )
        return await self._generate_text(prompt, COMPANY_BIO_FALLBACK)
