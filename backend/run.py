"""
Flask Application Entry Point
Runs the Customs Declaration Validation API server
"""
from customs_sim import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=True, host='0.0.0.0', port=5000)
