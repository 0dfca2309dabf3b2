"""
Location Autocomplete v1.0

Web application Streamlit per la ricerca di localita' (citta',
aeroporti, stazioni) con fallback automatico tra provider di
geocoding: Photon -> Nominatim -> GeoDB Cities.

Funzionalita':
- Autocomplete con cache in memoria (TTL 1 ora)
- Rate limiting per provider
- Statistiche di utilizzo e reset
"""
import streamlit as st
import pandas as pd
from datetime import datetime
import logging
import sys
from pathlib import Path

# Aggiungi la directory corrente al path per gli import
sys.path.insert(0, str(Path(__file__).parent))

from config import LOCATION_TYPES, MIN_QUERY_LENGTH, config
from core.exceptions import ValidationError
from core.models import SearchResponse
from orchestrator.search_engine import SearchEngine
from utils.logger import setup_logging
from utils.validators import validate_location_type

# Setup logging
setup_logging(
    level=config.log_level,
    log_file=config.log_to_file,
    provider_level=config.provider_log_level or None,
)
logger = logging.getLogger(__name__)


# ============================================================================
# CONFIGURAZIONE PAGINA
# ============================================================================

st.set_page_config(
    page_title=f"{config.app_name} v{config.version}",
    page_icon="📍",
    layout="wide",
    menu_items={
        'About': f"{config.app_name} - v{config.version}"
    }
)


# ============================================================================
# FUNZIONI HELPER
# ============================================================================

@st.cache_resource
def get_search_engine() -> SearchEngine:
    """Restituisce istanza cached del search engine (una per processo)."""
    return SearchEngine()


def response_to_dataframe(response: SearchResponse) -> pd.DataFrame:
    """Converte i risultati di una ricerca in DataFrame per la tabella."""
    if not response.results:
        return pd.DataFrame()

    data = [
        {
            "Localita'": r.display_name,
            "Nome": r.name,
            "Regione": r.state,
            "Paese": r.country,
            "Lat": r.latitude,
            "Lon": r.longitude,
            "Tipo": r.location_type,
        }
        for r in response.results
    ]
    return pd.DataFrame(data)


engine = get_search_engine()


# ============================================================================
# SIDEBAR - STATISTICHE
# ============================================================================

with st.sidebar:
    st.title("📍 Autocomplete")
    st.divider()

    st.subheader("📈 Statistiche")
    stats = engine.get_stats()

    col1, col2 = st.columns(2)
    with col1:
        st.metric(label="Richieste", value=stats.total_requests)
        st.metric(label="Cache hit", value=stats.cache_hits)
    with col2:
        st.metric(label="Hit rate", value=f"{stats.cache_hit_rate:.1f}%")
        st.metric(label="Voci in cache", value=stats.cache_size)

    provider_df = pd.DataFrame(
        {
            "Utilizzi": stats.provider_usage,
            "Errori": stats.provider_failures,
            "Attivo": engine.get_provider_status(),
        }
    )
    st.dataframe(provider_df)

    if st.button("🔄 Reset cache e statistiche", use_container_width=True):
        engine.reset()
        st.rerun()


# ============================================================================
# AREA RICERCA
# ============================================================================

st.header("🔍 Cerca localita'")

col_query, col_type = st.columns([3, 1])
with col_query:
    query = st.text_input(
        "Citta', aeroporto o stazione",
        placeholder="es. Paris, Milano, New York",
        help=f"Minimo {MIN_QUERY_LENGTH} caratteri"
    )
with col_type:
    type_label = st.selectbox("Tipo", options=["tutti"] + LOCATION_TYPES)

if query:
    try:
        location_type = validate_location_type(None if type_label == "tutti" else type_label)
    except ValidationError as e:
        st.error(f"❌ {e}")
        st.stop()

    response = engine.search(query, location_type)

    if response.source == "validation":
        st.info(f"Inserisci almeno {MIN_QUERY_LENGTH} caratteri.")
    elif response.count == 0:
        st.warning("⚠️ **Nessun risultato trovato.** Prova con un altro nome.")
    else:
        badge = "⚡ cache" if response.cached else f"🌐 {response.source}"
        st.success(f"✅ Trovate **{response.count}** localita' ({badge})")
        st.dataframe(response_to_dataframe(response), hide_index=True)


# ============================================================================
# FOOTER
# ============================================================================

st.divider()
st.caption(
    f"📍 {config.app_name} v{config.version} | "
    "Dati © OpenStreetMap contributors, GeoDB Cities | "
    f"© {datetime.now().year}"
)
