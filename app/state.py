"""
Streamlit session state and trainer initialization helpers.
"""

from __future__ import annotations

import logging
from typing import Optional

import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from core import config
from core.progress import init_db, get_database_url
from core.trainer import FlashcardTrainer, build_trainer

logger = logging.getLogger(__name__)


def init_database() -> None:
    """
    Create the remote progress tables once per server process.
    """
    @st.cache_resource
    def _init_database() -> bool:
        if get_database_url() is None:
            return False
        init_db()
        return True

    try:
        _init_database()
    except SQLAlchemyError as exc:
        logger.warning("Remote progress store not initialized: %s", exc)


def learner_id_from_query() -> Optional[str]:
    """Learner identity from the ?user_id= URL parameter, else LEARNER_ID."""
    return config.get_learner_id(st.query_params.get("user_id"))


def ensure_session_state() -> FlashcardTrainer:
    """
    Populate Streamlit session_state with defaults and return the trainer.

    A different learner identity in the URL gets a fresh trainer.
    """
    learner_id = learner_id_from_query()

    if "trainer" in st.session_state and st.session_state.get("learner_id") != learner_id:
        st.session_state.trainer.close()
        del st.session_state["trainer"]

    if "trainer" not in st.session_state:
        trainer = build_trainer(learner_id)
        trainer.start()
        trainer.watch_words()
        st.session_state.trainer = trainer
        st.session_state.learner_id = learner_id
    if "show_answer" not in st.session_state:
        st.session_state.show_answer = False
    if "show_word" not in st.session_state:
        st.session_state.show_word = True

    return st.session_state.trainer
