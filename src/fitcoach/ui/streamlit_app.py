# src/fitcoach/ui/streamlit_app.py
import os
import streamlit as st
import requests

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")

st.set_page_config(page_title="AI Fitness Coach", layout="wide")

st.title("💪 AI Fitness Coach")


def _load_saved():
    try:
        r = requests.get(f"{API_BASE}/plan/last", timeout=10)
        r.raise_for_status()
        return r.json()
    except requests.RequestException:
        return {}


def _show_plan_response(r: requests.Response):
    if r.ok:
        st.session_state["plan"] = r.json().get("plan")
        st.session_state.pop("plan_error", None)
    else:
        # previous plan stays on screen
        st.session_state["plan_error"] = r.json().get("message", "Failed to generate fitness plan. Please try again.")


def _image_button(name: str, category: str, key: str):
    images = st.session_state.setdefault("images", {})
    if key not in images and st.button("🖼️ View image", key=f"btn_{key}"):
        try:
            r = requests.post(f"{API_BASE}/image/generate", json={"prompt": name, "type": category}, timeout=120)
            r.raise_for_status()
            images[key] = r.json().get("imageUrl")
        except requests.RequestException:
            images[key] = None
    if key in images:
        if images[key]:
            st.image(images[key], caption=name, width=320)
        else:
            st.caption("No image available.")


if "plan" not in st.session_state:
    saved = _load_saved()
    st.session_state["plan"] = saved.get("plan")
    st.session_state["profile"] = saved.get("profile")

# --------------------------------------------------------------------
# PROFILE FORM
# --------------------------------------------------------------------
if not st.session_state.get("plan"):
    st.header("📝 Your Profile")
    with st.form("profile"):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name")
            age = st.text_input("Age")
            gender = st.selectbox("Gender", ["male", "female", "other"])
            height = st.text_input("Height (cm)")
            weight = st.text_input("Weight (kg)")
        with col2:
            goal = st.selectbox("Fitness goal", ["weight_loss", "muscle_gain", "endurance", "general_fitness"])
            level = st.selectbox("Fitness level", ["beginner", "intermediate", "advanced"])
            location = st.selectbox("Workout location", ["home", "gym", "outdoor"])
            diet = st.selectbox("Dietary preference", ["omnivore", "vegetarian", "vegan", "keto"])
            medical = st.text_area("Medical history (optional)")
            stress = st.selectbox("Stress level (optional)", ["", "low", "medium", "high"])
        submitted = st.form_submit_button("✨ Generate Plan")

    if submitted:
        profile = {
            "name": name, "age": age, "gender": gender, "height": height, "weight": weight,
            "fitnessGoal": goal, "fitnessLevel": level, "workoutLocation": location,
            "dietaryPreferences": diet, "medicalHistory": medical, "stressLevel": stress,
        }
        with st.spinner("Creating your custom plan..."):
            try:
                r = requests.post(f"{API_BASE}/plan/generate", json=profile, timeout=180)
                if r.status_code == 422:
                    st.session_state["plan_error"] = "Please fill in all required fields."
                else:
                    st.session_state["profile"] = profile
                    _show_plan_response(r)
            except requests.RequestException:
                st.session_state["plan_error"] = "Failed to generate fitness plan. Please try again."
        st.rerun()

if st.session_state.get("plan_error"):
    st.error(st.session_state["plan_error"])

# --------------------------------------------------------------------
# PLAN VIEW
# --------------------------------------------------------------------
plan = st.session_state.get("plan")
if plan:
    profile = st.session_state.get("profile") or {}
    st.subheader(f"{(profile.get('name') or 'Athlete').upper()}, your plan is ready 👋")
    st.write(f"“{plan['motivation']}”")

    c1, c2 = st.columns(2)
    if c1.button("🔄 Regenerate Plan"):
        with st.spinner("Regenerating..."):
            try:
                _show_plan_response(requests.post(f"{API_BASE}/plan/regenerate", timeout=180))
                st.session_state["images"] = {}
            except requests.RequestException:
                st.session_state["plan_error"] = "Failed to generate fitness plan. Please try again."
        st.rerun()
    if c2.button("🆕 New Plan"):
        requests.post(f"{API_BASE}/plan/clear", timeout=10)
        for key in ("plan", "profile", "images", "plan_error"):
            st.session_state.pop(key, None)
        st.session_state["plan"] = None
        st.rerun()

    workout_tab, diet_tab, tips_tab = st.tabs(["🏋️ Workout Plan", "🥗 Diet Plan", "💡 Tips"])

    with workout_tab:
        routines = plan["workout"]["dailyRoutines"]
        if not routines:
            st.info("No workout routines available. Please regenerate your plan.")
        for d, routine in enumerate(routines):
            with st.expander(routine["day"] or f"Day {d + 1}", expanded=d == 0):
                for e, exercise in enumerate(routine["exercises"]):
                    st.markdown(
                        f"**{exercise['name']}** — {exercise['sets']} sets × {exercise['reps']} reps, "
                        f"rest {exercise['rest']}"
                    )
                    st.caption(exercise["description"])
                    _image_button(exercise["name"], "exercise", f"ex_{d}_{e}")

    with diet_tab:
        for meal, text in plan["diet"]["meals"].items():
            st.markdown(f"**{meal.capitalize()}**: {text or '—'}")
            if text:
                _image_button(text, "food", f"meal_{meal}")

    with tips_tab:
        for tip in plan["tips"]:
            st.markdown(f"• {tip}")

st.markdown("---")
st.caption(f"Backend: {API_BASE}")
