from flask import request
from flask_restful import Resource, Api

from ..constants import ORA_INTERNAL_ERROR, ERROR_MESSAGES
from .models import SimulatorManager


def init_routes(api: Api, manager: SimulatorManager):
    kwargs = {'manager': manager}

    # Statements
    api.add_resource(Query, '/api/query', resource_class_kwargs=kwargs)

    # Schema browser
    api.add_resource(TableList, '/api/tables', resource_class_kwargs=kwargs)
    api.add_resource(TableDetail, '/api/tables/<string:name>', resource_class_kwargs=kwargs)

    # Session / reset
    api.add_resource(Session, '/api/session', resource_class_kwargs=kwargs)
    api.add_resource(Reset, '/api/reset', resource_class_kwargs=kwargs)


class SimulatorResource(Resource):
    def __init__(self, manager: SimulatorManager):
        self.manager = manager


class Query(SimulatorResource):
    def post(self):
        """Execute one SQL statement and return its QueryResult"""
        data = request.get_json(silent=True)
        if not data:
            return {'error': 'No data provided'}, 400

        sql = data.get('sql')
        if not isinstance(sql, str) or not sql.strip():
            return {'error': 'Missing required field: sql'}, 400

        try:
            return self.manager.execute(sql)
        except Exception as e:
            return {
                'success': False,
                'error': f"{ORA_INTERNAL_ERROR}: {ERROR_MESSAGES[ORA_INTERNAL_ERROR]}: {e}"
            }, 500


class TableList(SimulatorResource):
    def get(self):
        return self.manager.get_tables()


class TableDetail(SimulatorResource):
    def get(self, name):
        table = self.manager.get_table(name)
        if table is None:
            return {'error': f'Table {name.upper()} not found'}, 404
        return table


class Session(SimulatorResource):
    def get(self):
        return self.manager.get_session()

    def post(self):
        data = request.get_json(silent=True)
        if not data:
            return {'error': 'No data provided'}, 400

        command = data.get('command')
        if not isinstance(command, str) or not command.strip():
            return {'error': 'Missing required field: command'}, 400

        return {
            'output': self.manager.execute_session_command(command),
            'session': self.manager.get_session()
        }


class Reset(SimulatorResource):
    def post(self):
        info = self.manager.reset()
        return {'message': 'Database cleared.', 'tables_dropped': info['table_count']}
