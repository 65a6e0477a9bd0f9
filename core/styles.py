"""CSS tweaks for the sidebar, stat cards and status badges."""
import streamlit as st


def apply_styles():
    """Apply layout, badge and mobile-responsive CSS."""
    st.markdown("""
    <style>
    /* Expand main content when sidebar is collapsed */
    section[data-testid="stSidebar"][aria-expanded="false"] ~ div[data-testid="stAppViewContainer"] {
        margin-left: 0 !important;
    }

    /* Stat cards */
    .stat-card {
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        padding: 16px;
        margin-bottom: 10px;
    }
    .stat-card .stat-title {font-size: 0.85rem; color: #6b7280; margin: 0;}
    .stat-card .stat-value {font-size: 1.8rem; font-weight: 700; margin: 4px 0 0 0;}

    /* Status badges */
    .badge {display: inline-block; padding: 2px 10px; border-radius: 999px; font-size: 0.78rem;}
    .badge-success {background: #dcfce7; color: #166534;}
    .badge-warning {background: #fef3c7; color: #92400e;}
    .badge-danger {background: #fee2e2; color: #991b1b;}
    .badge-muted {background: #f3f4f6; color: #4b5563;}
    .badge-primary {background: #e0e7ff; color: #3730a3;}

    /* Mobile-friendly adjustments */
    @media (max-width: 768px) {
        .stButton button {
            min-height: 48px !important;
            font-size: 16px !important;
        }
        .block-container {
            padding-left: 1rem !important;
            padding-right: 1rem !important;
        }
        /* Prevent zoom on iOS */
        input, select, textarea {
            font-size: 16px !important;
        }
    }
    </style>
    """, unsafe_allow_html=True)
