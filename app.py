"""
Bike Journey Anomaly Map
Renders scored bike-share journeys and highlights the anomalous ones.

Run with: streamlit run app.py
"""

from journey_map.ui import main


if __name__ == "__main__":
    main()
