"""
Dati dimostrativi / Demo data seeding.
Popola flotta, clienti, agenti, lead e profilo aziendale al primo avvio.
Fills fleet, clients, agents, leads and company profile on first startup.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from rentsync.models import (
    COMPANY_PROFILE_ID,
    Agent,
    AgentStatus,
    Car,
    CarCategory,
    CarCondition,
    CarStatus,
    Client,
    ClientStatus,
    ClientType,
    CompanyProfile,
    FuelType,
    LeadSource,
    LeadStatus,
    MarketingLead,
    Transmission,
)

INITIAL_FLEET = [
    dict(id="1", brand="BMW", model="X5", plate="GF-992-AZ", category=CarCategory.SUV, price_per_day=120,
         status=CarStatus.AVAILABLE, image="https://picsum.photos/400/250?random=1",
         features=["Diesel", "4x4", "Navi Pro"], description="SUV di lusso perfetto per lunghi viaggi.",
         year=2023, mileage=15000, condition=CarCondition.USATO, fuel_type=FuelType.DIESEL,
         transmission=Transmission.AUTOMATICO),
    dict(id="2", brand="Fiat", model="500e", plate="GG-102-BB", category=CarCategory.ECONOMY, price_per_day=45,
         status=CarStatus.RENTED, image="https://picsum.photos/400/250?random=2",
         features=["Elettrica", "City Mode", "CarPlay"], description="Agile city car elettrica.",
         year=2024, mileage=500, condition=CarCondition.NUOVO, fuel_type=FuelType.ELETTRICO,
         transmission=Transmission.AUTOMATICO),
    dict(id="3", brand="Mercedes", model="Class C", plate="FE-221-CX", category=CarCategory.LUXURY,
         price_per_day=150, status=CarStatus.MAINTENANCE, image="https://picsum.photos/400/250?random=3",
         features=["Hybrid", "Pelle", "ADAS L2"], description="Eleganza e comfort superiori.",
         year=2022, mileage=45000, condition=CarCondition.USATO, fuel_type=FuelType.IBRIDO,
         transmission=Transmission.AUTOMATICO),
    dict(id="4", brand="Tesla", model="Model 3", plate="HG-555-TT", category=CarCategory.LUXURY,
         price_per_day=130, status=CarStatus.AVAILABLE, image="https://picsum.photos/400/250?random=4",
         features=["Elettrica", "Autopilot", "Tetto Panoramico"], description="Tecnologia pura e prestazioni.",
         year=2023, mileage=12000, condition=CarCondition.USATO, fuel_type=FuelType.ELETTRICO,
         transmission=Transmission.AUTOMATICO),
    dict(id="5", brand="Jeep", model="Renegade", plate="FF-404-ER", category=CarCategory.SUV, price_per_day=80,
         status=CarStatus.RENTED, image="https://picsum.photos/400/250?random=5",
         features=["Diesel", "Off-road", "Spaziosa"], description="Versatilità per ogni terreno.",
         year=2021, mileage=60000, condition=CarCondition.USATO, fuel_type=FuelType.DIESEL,
         transmission=Transmission.MANUALE),
]

INITIAL_CLIENTS = [
    dict(id="1", name="Mario Rossi", email="mario.rossi@example.com", phone="+39 333 1234567",
         type=ClientType.PRIVATO, status=ClientStatus.ATTIVO, risk_score=85),
    dict(id="2", name="Logistics Solutions Srl", email="info@logistics.it", phone="+39 02 1234567",
         type=ClientType.AZIENDA, vat_number="IT12345678901", status=ClientStatus.ATTIVO, risk_score=92),
]

INITIAL_AGENTS = [
    dict(id="1", name="Alessandro Verdi", nickname="ale_verdi", region="Lombardia", mandate_start="2023-01-15",
         commission_rate=15, active_clients=24, status=AgentStatus.ATTIVO,
         billing={"iban": "IT60X0542811101000000123456", "bank_name": "Intesa Sanpaolo",
                  "vat_number": "RSSVLD80A01H501U", "billing_address": "Via Roma 1, Milano",
                  "payment_terms": "30gg d.f."}),
    dict(id="2", name="Marco Neri", nickname="marco_n", region="Lazio", mandate_start="2023-03-10",
         commission_rate=12, active_clients=15, status=AgentStatus.ATTIVO,
         billing={"iban": "IT12Y0200800000111112222233", "bank_name": "Unicredit",
                  "vat_number": "IT12345678901", "billing_address": "Viale Europa 22, Roma",
                  "payment_terms": "60gg d.f."}),
    dict(id="999", name="Agente Demo", nickname="demo", region="Italia", mandate_start="2024-01-01",
         commission_rate=20, active_clients=5, status=AgentStatus.ATTIVO,
         billing={"iban": "IT00DEMO000000000000000000", "bank_name": "Demo Bank",
                  "vat_number": "00000000000", "billing_address": "Via Demo 99, Tech City",
                  "payment_terms": "30gg"}),
]

INITIAL_LEADS = [
    dict(id="1", name="Studio Legale Bianchi", company="Studio Bianchi", interest="Auto di rappresentanza",
         status=LeadStatus.NEW, source=LeadSource.MANUAL, email="segreteria@studiobianchi.it",
         phone="02 5551234"),
    dict(id="2", name="Ristorante Da Luigi", company="Ristorante Da Luigi", interest="Furgone Frigo",
         status=LeadStatus.CONTACTED, source=LeadSource.MANUAL, email="info@daluigi.com", phone="06 9998887"),
]

INITIAL_COMPANY = dict(
    id=COMPANY_PROFILE_ID,
    name="RentSync AI",
    slogan="Mobilità intelligente per il tuo business",
    vat_number="12345678901",
    address="Via dell'Innovazione 42",
    city="Milano (MI)",
    email="info@rentsync.ai",
    phone="+39 02 123 4567",
    website="www.rentsync.ai",
    bio="Leader nel settore del noleggio a lungo termine e flotte aziendali, offriamo soluzioni "
        "flessibili e veicoli premium per ogni esigenza di mobilità.",
    social={"linkedin": "linkedin.com/company/rentsync", "instagram": "instagram.com/rentsync"},
    bank_info={"iban": "IT00X0000000000000000000000", "bank_name": "Banca Digitale"},
)


async def seed_demo_data(session: AsyncSession) -> None:
    """Inserire i dati demo se la flotta e vuota / Insert demo data if the fleet is empty."""
    result = await session.execute(select(func.count(Car.id)))
    count = result.scalar()

    if count:
        print(f"[OK] {count} auto esistenti, seed ignorato / {count} existing car(s), seed skipped")
        return

    session.add_all([Car(accessories=[], **c) for c in INITIAL_FLEET])
    session.add_all([Client(documents=[], rental_history=[], **c) for c in INITIAL_CLIENTS])
    session.add_all([Agent(**a) for a in INITIAL_AGENTS])
    session.add_all([MarketingLead(**lead) for lead in INITIAL_LEADS])
    if await session.get(CompanyProfile, COMPANY_PROFILE_ID) is None:
        session.add(CompanyProfile(**INITIAL_COMPANY))
    await session.commit()
    print(f"[OK] Dati demo caricati / Demo data loaded: {len(INITIAL_FLEET)} auto, "
          f"{len(INITIAL_CLIENTS)} clienti, {len(INITIAL_AGENTS)} agenti")
