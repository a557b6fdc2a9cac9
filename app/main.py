import sys
import os
import streamlit as st

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from checkout.errors import PricingError
from checkout.inventory import Inventory
from checkout.money import format_money
from checkout.observability import setup_logging
from checkout.promotions import PROMOTION_KINDS
from Billing_Service.invoice import invoice_summary
from toolbox.songs import Collection


# ============ Демо-данные ============

DEMO_PRODUCTS = (
    ("Milk", "1.25", None),
    ("Shampoo", "10.00", {"kind": "get_one_free", "nth": 3}),
    ("Green Tea", "4.90", {"kind": "package", "size": 3, "percent": 20}),
    ("Coffee Beans", "12.40", {"kind": "threshold", "threshold": 2, "percent": 50}),
    ("Chocolate", "2.35", {"kind": "threshold", "threshold": 5, "percent": 10}),
)

DEMO_COUPONS = (
    ("SPRING", {"kind": "percent", "percent": 10}),
    ("TEARAIN", {"kind": "amount", "amount": "5.00"}),
)

DEMO_SONGS = """
My Favorite Things. John Coltrane. Jazz, Bebop. popular, cover
Alabama. John Coltrane. Jazz, Avantgarde. melancholic
Tutu. Miles Davis. Jazz, Fusion. weird, cool
Autumn Leaves. Bill Evans. Jazz. popular
'Round Midnight. Thelonious Monk. Jazz, Bebop
Moonlight Sonata. Beethoven. Classical. popular
Goldberg Variations. Bach. Classical, Baroque
Eine Kleine Nachtmusik. Mozart. Classical. popular, violin
"""

DEMO_ARTIST_TAGS = {
    "John Coltrane": ["saxophone"],
    "Bach": ["piano", "polyphony"],
    "Thelonious Monk": ["piano", "bebop"],
    "Bill Evans": ["piano"],
}


# ============ Кэширование ============
@st.cache_resource
def get_logging():
    return setup_logging(
        os.environ.get("LOG_LEVEL", "INFO"), os.environ.get("LOG_FORMAT", "text")
    )


@st.cache_resource
def get_inventory() -> Inventory:
    inventory = Inventory()
    for name, price, promotion in DEMO_PRODUCTS:
        inventory.register(name, price, promotion)
    for name, params in DEMO_COUPONS:
        inventory.register_coupon(name, params)
    return inventory


@st.cache_resource
def get_collection() -> Collection:
    return Collection(DEMO_SONGS, DEMO_ARTIST_TAGS)


# ============ Инициализация ============
st.set_page_config(
    page_title="Shop Pricing",
    page_icon="🧾",
    layout="wide",
    initial_sidebar_state="expanded",
)

get_logging()
inventory = get_inventory()

# Корзина живёт в сессии, инвентарь общий
if "cart" not in st.session_state:
    st.session_state.cart = inventory.new_cart()


def reset_cart():
    st.session_state.cart = inventory.new_cart()


# ============ HEADER ============
st.title("🧾 Магазин: акции, купоны, счёт")

# ============ SIDEBAR - Навигация ============
with st.sidebar:
    st.header("📂 Навигация")
    page = st.radio(
        "Выберите раздел:",
        ["🏪 Каталог", "🛒 Корзина", "🎵 Песни"],
        label_visibility="collapsed",
    )

    st.divider()
    st.markdown("### 🏷️ Виды акций")
    for kind in PROMOTION_KINDS:
        st.caption(kind)


# ============ PAGE: КАТАЛОГ ============
if page == "🏪 Каталог":
    st.header("🏪 Каталог товаров")

    for name, entry in inventory.products.items():
        with st.container():
            cols = st.columns([5, 2, 2, 2])
            with cols[0]:
                st.markdown(f"**{name}**")
                if entry.message():
                    st.caption(f"🏷️ {entry.message()}")
            with cols[1]:
                st.write(format_money(entry.product.price))
            with cols[2]:
                qty = st.number_input(
                    "Кол-во",
                    min_value=1,
                    max_value=inventory.limits.max_units,
                    value=1,
                    key=f"qty_{name}",
                    label_visibility="collapsed",
                )
            with cols[3]:
                if st.button("➕ В корзину", key=f"add_{name}"):
                    try:
                        item = st.session_state.cart.add(name, int(qty))
                        st.success(f"✅ {name} × {item.count}")
                    except PricingError as e:
                        st.error(f"❌ {e}")
            st.divider()


# ============ PAGE: КОРЗИНА ============
elif page == "🛒 Корзина":
    st.header("🛒 Ваша корзина")

    cart = st.session_state.cart

    if not cart.items:
        st.info("🛍️ Корзина пуста. Перейдите в каталог!")
    else:
        summary = invoice_summary(cart)

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            st.metric("📦 Единиц", summary["units"])
        with col2:
            st.metric("💰 Без скидок", format_money(summary["subtotal"]))
        with col3:
            st.metric("🏷️ Акции", format_money(summary["promotions"]))
        with col4:
            st.metric("🧾 Итого", format_money(summary["total"]))

        st.divider()

        # Купон
        if cart.coupon is None:
            code = st.text_input("🎟️ Купон", key="coupon_code")
            if st.button("Применить купон") and code:
                try:
                    if cart.use(code) is None:
                        st.warning(f"Купон {code} не найден, скидки нет")
                    else:
                        st.rerun()
                except PricingError as e:
                    st.error(f"❌ {e}")
        else:
            st.success(f"🎟️ {cart.coupon.message()}")

        st.subheader("🧾 Счёт")
        st.code(cart.invoice(), language=None)

        if st.button("🗑️ Очистить корзину", use_container_width=True):
            reset_cart()
            st.rerun()


# ============ PAGE: ПЕСНИ ============
elif page == "🎵 Песни":
    st.header("🎵 Поиск по коллекции")

    collection = get_collection()
    artists = sorted({s.artist for s in collection.songs})

    col1, col2 = st.columns(2)
    with col1:
        tags_text = st.text_input(
            "🏷️ Теги через запятую ('piano!' - без фортепиано)", key="song_tags"
        )
    with col2:
        artist = st.selectbox("🎤 Артист", ["Все"] + artists, key="song_artist")

    tags = [t.strip() for t in tags_text.split(",") if t.strip()]
    found = collection.find(
        tags=tags or None,
        artist=artist if artist != "Все" else None,
    )

    st.info(f"🔍 Найдено песен: **{len(found)}**")
    for song in found:
        st.write(f"**{song.name}** - {song.artist}")
        st.caption(", ".join(song.tags))
