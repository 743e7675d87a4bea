# Webseiten-Check - conversion and AI-detection checks for German web copy
